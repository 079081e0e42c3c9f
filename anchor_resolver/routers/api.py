"""
API 라우터 (앵커 트랜잭션 조회, 체인 목록)
"""
import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from ..blockchains import get_chain_family
from ..errors import UnableToGetRemoteHashError, UnsupportedChainError
from ..models import Transport
from ..registry import ChainExplorerRegistry, default_registry

logger = logging.getLogger(__name__)


def register_api_routes(
    app: FastAPI,
    registry: Optional[ChainExplorerRegistry] = None,
    request: Optional[Transport] = None,
):
    """API 라우트를 FastAPI 앱에 등록"""
    registry = registry or default_registry

    @app.get("/api/anchor/{chain}/{txid}")
    async def get_anchor_transaction(chain: str, txid: str):
        """앵커 트랜잭션 조회 API"""
        try:
            record = await registry.resolve(chain, txid, request=request)
        except UnsupportedChainError as e:
            return JSONResponse(status_code=400, content={"found": False, "message": str(e)})
        except UnableToGetRemoteHashError as e:
            return JSONResponse(status_code=404, content={"found": False, "message": str(e)})
        return JSONResponse(content={"found": True, "result": record.model_dump(mode="json", by_alias=True)})

    @app.get("/api/chains")
    async def get_chains():
        """지원하는 체인 목록 조회 API"""
        supported_chains = []
        for chain in registry.supported_chains():
            supported_chains.append({
                "chain": chain.value,
                "family": get_chain_family(chain),
                "explorers": [backend.service_name for backend in registry.get_backends(chain)],
            })
        return JSONResponse(content={"supportedChains": supported_chains})
