"""
체인별 익스플로러 레지스트리와 순차 폴백 조회
"""
import logging
from typing import Dict, Iterable, List, Optional, Tuple

from . import explorers, transport
from .blockchains import TRANSACTION_ID_PLACEHOLDER
from .configuration import config
from .errors import AnchorResolutionError, UnableToGetRemoteHashError, UnsupportedChainError
from .models import CanonicalTransactionRecord, ExplorerBackend, ParsingContext, SupportedChains, Transport
from .normalizers import load_json

# 로거 설정
logger = logging.getLogger(__name__)


def _as_chain(chain) -> SupportedChains:
    try:
        return SupportedChains(chain)
    except ValueError as e:
        raise UnsupportedChainError(f"지원하지 않는 체인입니다: {chain}") from e


def build_transaction_url(backend: ExplorerBackend, chain: SupportedChains, transaction_id: str) -> str:
    return backend.service_url(chain).replace(TRANSACTION_ID_PLACEHOLDER, transaction_id)


class ChainExplorerRegistry:
    """체인 → 익스플로러 백엔드 목록 매핑"""

    def __init__(self):
        self._backends: Dict[SupportedChains, List[ExplorerBackend]] = {}

    def register(self, backend: ExplorerBackend, chains: Iterable[SupportedChains]) -> None:
        for chain in chains:
            self._backends.setdefault(_as_chain(chain), []).append(backend)

    def get_backends(self, chain) -> List[ExplorerBackend]:
        """priority 내림차순 정렬. 같은 priority는 등록 순서 유지"""
        chain = _as_chain(chain)
        backends = self._backends.get(chain)
        if not backends:
            raise UnsupportedChainError(f"등록된 익스플로러가 없는 체인입니다: {chain.value}")
        return sorted(backends, key=lambda backend: -backend.priority)

    def supported_chains(self) -> List[SupportedChains]:
        return [chain for chain in SupportedChains if self._backends.get(chain)]

    async def resolve(
        self,
        chain,
        transaction_id: str,
        request: Optional[Transport] = None,
        min_confirmations: Optional[int] = None,
    ) -> CanonicalTransactionRecord:
        """첫 번째로 성공한 백엔드의 결과 반환. 모두 실패하면 UnableToGetRemoteHashError"""
        chain = _as_chain(chain)
        backends = self.get_backends(chain)
        request = request or transport.request
        if min_confirmations is None:
            min_confirmations = config.MIN_CONFIRMATIONS

        failures: List[Tuple[str, Exception]] = []
        for backend in backends:
            key = backend.service_name
            try:
                url = build_transaction_url(backend, chain, transaction_id)
                json_data = load_json(await request(url))
                record = await backend.parse(ParsingContext(
                    raw_response=json_data,
                    chain=chain,
                    request=request,
                    min_confirmations=min_confirmations,
                ))
                logger.debug(f"[{key}] {chain.value} 정규화 성공.")
                return record
            except AnchorResolutionError as e:
                logger.debug(f"[{key}] {chain.value} 조회 실패 ({type(e).__name__}): {e}")
                failures.append((key, e))
            except Exception as e:
                logger.error(f"[{key}] 알 수 없는 오류 발생 → {e}. 체인: {chain.value}", exc_info=True)
                failures.append((key, e))

        logger.warning(
            f"{chain.value} 트랜잭션 {transaction_id} 조회 실패: "
            + ", ".join(f"{name}={type(err).__name__}" for name, err in failures)
        )
        raise UnableToGetRemoteHashError(chain.value, failures)


def create_default_registry() -> ChainExplorerRegistry:
    registry = ChainExplorerRegistry()
    registry.register(explorers.blockstream.explorer_api, [SupportedChains.BITCOIN, SupportedChains.TESTNET])
    registry.register(explorers.blockcypher.explorer_api, [SupportedChains.BITCOIN, SupportedChains.TESTNET])
    registry.register(explorers.etherscan.explorer_api, [
        SupportedChains.ETHMAIN,
        SupportedChains.ETHROPST,
        SupportedChains.ETHRINKEBY,
        SupportedChains.ETHGOERLI,
        SupportedChains.ETHSEPOLIA,
        SupportedChains.ARBITRUM_ONE,
        SupportedChains.ARBITRUM_SEPOLIA,
    ])
    registry.register(explorers.blockscout.explorer_api, [SupportedChains.BLOXBERG])
    return registry


default_registry = create_default_registry()


async def resolve_anchor(
    chain,
    transaction_id: str,
    request: Optional[Transport] = None,
    min_confirmations: Optional[int] = None,
) -> CanonicalTransactionRecord:
    """기본 레지스트리로 앵커 트랜잭션 조회"""
    return await default_registry.resolve(chain, transaction_id, request=request, min_confirmations=min_confirmations)
