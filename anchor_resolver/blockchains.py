"""
체인별 정적 설정 (체인 패밀리, 해시 접두사, EVM chain id)
"""
from typing import Dict, Tuple

from .models import SupportedChains

# serviceURL 안에서 실제 트랜잭션 ID로 치환되는 토큰
TRANSACTION_ID_PLACEHOLDER = "{transaction_id}"

BITCOIN_FAMILY = "bitcoin"
ETHEREUM_FAMILY = "ethereum"

# 앵커 페이로드 앞에서 제거할 바이트 시퀀스
# 6a20 = OP_RETURN + 32바이트 push
HASH_PREFIXES: Dict[str, Tuple[str, ...]] = {
    BITCOIN_FAMILY: ("6a20", "OP_RETURN "),
    ETHEREUM_FAMILY: ("0x",),
}

CHAIN_FAMILIES: Dict[SupportedChains, str] = {
    SupportedChains.BITCOIN: BITCOIN_FAMILY,
    SupportedChains.TESTNET: BITCOIN_FAMILY,
    SupportedChains.MOCKNET: BITCOIN_FAMILY,
    SupportedChains.REGTEST: BITCOIN_FAMILY,
    SupportedChains.ETHMAIN: ETHEREUM_FAMILY,
    SupportedChains.ETHROPST: ETHEREUM_FAMILY,
    SupportedChains.ETHRINKEBY: ETHEREUM_FAMILY,
    SupportedChains.ETHGOERLI: ETHEREUM_FAMILY,
    SupportedChains.ETHSEPOLIA: ETHEREUM_FAMILY,
    SupportedChains.ARBITRUM_ONE: ETHEREUM_FAMILY,
    SupportedChains.ARBITRUM_SEPOLIA: ETHEREUM_FAMILY,
    SupportedChains.BLOXBERG: ETHEREUM_FAMILY,
}

# Etherscan V2 게이트웨이의 chainid 파라미터
ETHERSCAN_CHAIN_IDS: Dict[SupportedChains, int] = {
    SupportedChains.ETHMAIN: 1,
    SupportedChains.ETHROPST: 3,
    SupportedChains.ETHRINKEBY: 4,
    SupportedChains.ETHGOERLI: 5,
    SupportedChains.ETHSEPOLIA: 11155111,
    SupportedChains.ARBITRUM_ONE: 42161,
    SupportedChains.ARBITRUM_SEPOLIA: 421614,
}


def get_chain_family(chain: SupportedChains) -> str:
    return CHAIN_FAMILIES[SupportedChains(chain)]


def get_hash_prefixes(chain: SupportedChains) -> Tuple[str, ...]:
    """체인 패밀리에 해당하는 접두사 목록 반환"""
    return HASH_PREFIXES[get_chain_family(chain)]
