import os
import logging

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from anchor_resolver import config
from anchor_resolver.routers import register_api_routes
from anchor_resolver.utils import setup_logging

load_dotenv()

# --- 환경 감지 및 설정 ---
DEBUG_MODE = config.ENVIRONMENT == "development"
RELOAD_ENABLED = os.getenv("RELOAD", "false").lower() == "true" if DEBUG_MODE else False

# --- 로깅 설정 ---
log_level = setup_logging(config.LOG_LEVEL)
logger = logging.getLogger(__name__)

logger.info("="*60)
logger.info(f"로깅 시스템 초기화 완료 - 레벨: {logging.getLevelName(log_level)}")
logger.info("="*60)

config.validate()

# --- FastAPI 앱 초기화 ---
app = FastAPI(title="Anchor Transaction Lookup", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_api_routes(app)


@app.get("/health")
async def health():
    return {"status": "ok", "minConfirmations": config.MIN_CONFIRMATIONS}


if __name__ == "__main__":
    logger.info(f"환경: {config.ENVIRONMENT.upper()}, 디버그: {DEBUG_MODE}, 리로드: {RELOAD_ENABLED}")

    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))
    logger.info(f"서버 시작 (포트 {port}, 호스트: {host})")
    uvicorn.run("main:app", host=host, port=port, log_level=logging.getLevelName(log_level).lower(),
                use_colors=False, access_log=True, reload=RELOAD_ENABLED)
