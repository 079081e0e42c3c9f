"""
앵커 트랜잭션 조회 설정 관리
"""
import os
import logging
from typing import Optional
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


class AnchorConfiguration:
    """앵커 조회 설정 클래스"""

    # ========== 검증 설정 ==========
    # 신뢰하기 위한 최소 컨펌 수 (모든 익스플로러 공통)
    MIN_CONFIRMATIONS: int = int(os.getenv("MIN_CONFIRMATIONS", "1"))

    # ========== HTTP 설정 ==========
    REQUEST_TIMEOUT: float = float(os.getenv("REQUEST_TIMEOUT", "30.0"))
    USER_AGENT: str = os.getenv("USER_AGENT", "Mozilla/5.0")

    # ========== 익스플로러 API ==========
    # Etherscan V2 (멀티체인 게이트웨이, chainid 파라미터 사용)
    ETHERSCAN_API_URL: str = os.getenv("ETHERSCAN_API_URL", "https://api.etherscan.io/v2/api")
    ETHERSCAN_API_KEY: Optional[str] = os.getenv("ETHERSCAN_API_KEY")

    # Blockscout (bloxberg)
    BLOCKSCOUT_API_URL: str = os.getenv("BLOCKSCOUT_API_URL", "https://blockexplorer.bloxberg.org/api")

    # Blockstream (Esplora)
    BLOCKSTREAM_API_URL: str = os.getenv("BLOCKSTREAM_API_URL", "https://blockstream.info")

    # Blockcypher
    BLOCKCYPHER_API_URL: str = os.getenv("BLOCKCYPHER_API_URL", "https://api.blockcypher.com/v1")
    BLOCKCYPHER_API_TOKEN: Optional[str] = os.getenv("BLOCKCYPHER_API_TOKEN")

    # ========== 기타 설정 ==========
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "production").lower()
    # 로깅 레벨
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "DEBUG" if ENVIRONMENT == "development" else "INFO")

    @classmethod
    def validate(cls) -> bool:
        """설정 유효성 검사"""
        if cls.MIN_CONFIRMATIONS < 0:
            raise ValueError(f"MIN_CONFIRMATIONS는 0 이상이어야 합니다: {cls.MIN_CONFIRMATIONS}")
        if cls.REQUEST_TIMEOUT <= 0:
            raise ValueError(f"REQUEST_TIMEOUT은 0보다 커야 합니다: {cls.REQUEST_TIMEOUT}")

        if not cls.ETHERSCAN_API_KEY:
            logger.warning("ETHERSCAN_API_KEY가 설정되지 않았습니다. Etherscan 요청이 제한될 수 있습니다.")

        return True


# 전역 설정 인스턴스
config = AnchorConfiguration()
