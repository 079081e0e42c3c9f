"""
앵커 조회에서 사용하는 타입 정의
"""
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Awaitable, Callable, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

# 트랜잭션 전송 함수: URL → 응답 본문
Transport = Callable[[str], Awaitable[str]]

REMOTE_HASH_PATTERN = re.compile(r"^[0-9a-f]{64}$")


# 지원 체인 Enum
class SupportedChains(str, Enum):
    """지원하는 체인 식별자"""
    BITCOIN = "bitcoin"
    ETHMAIN = "ethmain"
    ETHROPST = "ethropst"
    ETHRINKEBY = "ethrinkeby"
    ETHGOERLI = "ethgoerli"
    ETHSEPOLIA = "ethsepolia"
    ARBITRUM_ONE = "arbitrumone"
    ARBITRUM_SEPOLIA = "arbitrumsepolia"
    BLOXBERG = "bloxberg"
    MOCKNET = "mocknet"          # 로컬 테스트용 (익스플로러 없음)
    REGTEST = "regtest"          # 로컬 테스트용 (익스플로러 없음)
    TESTNET = "testnet"          # 비트코인 테스트넷


class CanonicalTransactionRecord(BaseModel):
    """검증기에 전달되는 정규화된 앵커 트랜잭션"""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    remote_hash: str = Field(alias="remoteHash", description="접두사 없는 64자리 소문자 hex")
    issuing_address: str = Field(alias="issuingAddress", min_length=1)
    time: datetime
    revoked_addresses: Tuple[str, ...] = Field(default=(), alias="revokedAddresses")

    @field_validator("remote_hash")
    @classmethod
    def _check_remote_hash(cls, value: str) -> str:
        if not REMOTE_HASH_PATTERN.match(value):
            raise ValueError(f"remoteHash는 64자리 hex여야 합니다: {value!r}")
        return value

    @field_validator("time")
    @classmethod
    def _as_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


@dataclass(frozen=True)
class ParsingContext:
    """파서 입력: 원본 응답과 부가 요청에 필요한 협력자"""
    raw_response: Any
    chain: SupportedChains
    request: Transport
    min_confirmations: int


@dataclass(frozen=True)
class ExplorerBackend:
    """체인 패밀리 x 익스플로러 제공자 하나에 대응하는 백엔드"""
    service_url: Callable[[SupportedChains], str]
    service_name: str
    parse: Callable[[ParsingContext], Awaitable[CanonicalTransactionRecord]]
    # 높을수록 먼저 시도, 음수는 최후 수단
    priority: int = 0
