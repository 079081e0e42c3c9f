"""
Blockstream (Esplora) 비트코인 익스플로러
"""
import logging

from ..blockchains import TRANSACTION_ID_PLACEHOLDER, get_hash_prefixes
from ..configuration import config
from ..errors import MalformedResponseError, UnsupportedChainError
from ..models import CanonicalTransactionRecord, ExplorerBackend, ParsingContext, SupportedChains
from ..normalizers import EPOCH, check_confirmations, strip_hash_prefix, to_int, to_time

logger = logging.getLogger(__name__)

SERVICE_NAME = "blockstream"

NETWORK_PATHS = {
    SupportedChains.BITCOIN: "/api",
    SupportedChains.TESTNET: "/testnet/api",
}


def _api_root(chain: SupportedChains) -> str:
    chain = SupportedChains(chain)
    if chain not in NETWORK_PATHS:
        raise UnsupportedChainError(f"Blockstream에서 지원하지 않는 체인입니다: {chain.value}")
    return f"{config.BLOCKSTREAM_API_URL}{NETWORK_PATHS[chain]}"


def get_transaction_service_url(chain: SupportedChains) -> str:
    return f"{_api_root(chain)}/tx/{TRANSACTION_ID_PLACEHOLDER}"


def get_tip_height_service_url(chain: SupportedChains) -> str:
    return f"{_api_root(chain)}/blocks/tip/height"


async def parse_blockstream_response(context: ParsingContext) -> CanonicalTransactionRecord:
    data = context.raw_response
    if not isinstance(data, dict) or not data.get("vout") or not data.get("vin"):
        raise MalformedResponseError("Invalid Blockstream response")

    outputs = data["vout"]
    issuing_address = (data["vin"][0].get("prevout") or {}).get("scriptpubkey_address")
    anchor_script = outputs[-1].get("scriptpubkey")
    if not issuing_address or not anchor_script:
        raise MalformedResponseError("Missing issuing address/OP_RETURN output in Blockstream result")

    remote_hash = strip_hash_prefix(anchor_script, get_hash_prefixes(context.chain))

    status = data.get("status") or {}
    if not status.get("confirmed"):
        # 멤풀 트랜잭션: 컨펌 0, 블록 시간 없음
        check_confirmations(0, context.min_confirmations)
        time = EPOCH
    else:
        time = to_time(status.get("block_time"))
        block_height = to_int(status.get("block_height"))
        tip_height = to_int((await context.request(get_tip_height_service_url(context.chain))).strip())
        if block_height is None or tip_height is None:
            raise MalformedResponseError("Missing block height in Blockstream result")
        check_confirmations(tip_height - block_height + 1, context.min_confirmations)

    revoked_addresses = tuple(
        output["scriptpubkey_address"] for output in outputs if output.get("scriptpubkey_address")
    )
    return CanonicalTransactionRecord(
        remote_hash=remote_hash,
        issuing_address=issuing_address,
        time=time,
        revoked_addresses=revoked_addresses,
    )


explorer_api = ExplorerBackend(
    service_url=get_transaction_service_url,
    service_name=SERVICE_NAME,
    parse=parse_blockstream_response,
    priority=1,
)
