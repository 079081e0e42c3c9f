"""
Etherscan V2 멀티체인 게이트웨이

모든 EVM 체인을 하나의 엔드포인트에서 chainid 파라미터로 구분한다.
1) eth_getTransactionByHash → 발신자, 입력 데이터, 블록 번호
2) eth_getBlockByNumber      → 블록 타임스탬프
3) eth_blockNumber           → 현재 블록 (컨펌 수 계산)
"""
import logging

from ..blockchains import ETHERSCAN_CHAIN_IDS, TRANSACTION_ID_PLACEHOLDER, get_hash_prefixes
from ..configuration import config
from ..errors import MalformedResponseError, UnsupportedChainError
from ..models import CanonicalTransactionRecord, ExplorerBackend, ParsingContext, SupportedChains
from ..normalizers import check_confirmations, load_json, strip_hash_prefix, to_int, to_time

logger = logging.getLogger(__name__)

SERVICE_NAME = "etherscan"


def _base_url(chain: SupportedChains) -> str:
    chain = SupportedChains(chain)
    if chain not in ETHERSCAN_CHAIN_IDS:
        raise UnsupportedChainError(f"Etherscan에서 지원하지 않는 체인입니다: {chain.value}")
    return f"{config.ETHERSCAN_API_URL}?chainid={ETHERSCAN_CHAIN_IDS[chain]}&module=proxy"


def _with_api_key(url: str) -> str:
    return f"{url}&apikey={config.ETHERSCAN_API_KEY}" if config.ETHERSCAN_API_KEY else url


def get_transaction_service_url(chain: SupportedChains) -> str:
    return _with_api_key(f"{_base_url(chain)}&action=eth_getTransactionByHash&txhash={TRANSACTION_ID_PLACEHOLDER}")


def get_block_service_url(chain: SupportedChains, block_number: str) -> str:
    return _with_api_key(f"{_base_url(chain)}&action=eth_getBlockByNumber&tag={block_number}&boolean=false")


def get_block_number_service_url(chain: SupportedChains) -> str:
    return _with_api_key(f"{_base_url(chain)}&action=eth_blockNumber")


async def _get_rpc_result(context: ParsingContext, url: str):
    data = load_json(await context.request(url))
    if not isinstance(data, dict) or data.get("result") is None:
        raise MalformedResponseError(f"Invalid Etherscan response: {str(data)[:200]}")
    return data["result"]


async def get_etherscan_block_timestamp(context: ParsingContext, block_number: str):
    block = await _get_rpc_result(context, get_block_service_url(context.chain, block_number))
    if not isinstance(block, dict) or block.get("timestamp") is None:
        raise MalformedResponseError(f"Missing timestamp in Etherscan block {block_number}")
    return to_time(block["timestamp"])


async def check_etherscan_confirmations(context: ParsingContext, block_number: int) -> int:
    current = to_int(await _get_rpc_result(context, get_block_number_service_url(context.chain)))
    if current is None:
        raise MalformedResponseError("Invalid Etherscan block number response")
    return check_confirmations(current - block_number, context.min_confirmations)


async def parse_etherscan_response(context: ParsingContext) -> CanonicalTransactionRecord:
    raw = context.raw_response
    data = raw.get("result") if isinstance(raw, dict) else None
    # 한도 초과 등 오류 시 result가 문자열로 옴
    if not isinstance(data, dict) or not data:
        raise MalformedResponseError(f"Invalid Etherscan response: {str(raw)[:200]}")

    issuing_address = str(data.get("from") or "")
    input_hex = str(data.get("input") or "")
    if not issuing_address or not input_hex:
        raise MalformedResponseError("Missing input/from in Etherscan result")

    block_number = to_int(data.get("blockNumber"))
    if block_number is None:
        # 아직 블록에 포함되지 않은 트랜잭션: 컨펌 0, 타임스탬프 조회 불가
        check_confirmations(0, context.min_confirmations)
        raise MalformedResponseError("Missing blockNumber in Etherscan result")

    remote_hash = strip_hash_prefix(input_hex, get_hash_prefixes(context.chain))
    time = await get_etherscan_block_timestamp(context, hex(block_number))
    confirmations = await check_etherscan_confirmations(context, block_number)
    logger.debug(f"[{SERVICE_NAME}] {context.chain.value} 컨펌 수: {confirmations}")

    return CanonicalTransactionRecord(
        remote_hash=remote_hash,
        issuing_address=issuing_address,
        time=time,
        revoked_addresses=(),
    )


explorer_api = ExplorerBackend(
    service_url=get_transaction_service_url,
    service_name=SERVICE_NAME,
    parse=parse_etherscan_response,
    priority=0,
)
