"""
Blockscout (bloxberg) 익스플로러

트랜잭션: {BLOCKSCOUT_API_URL}?module=transaction&action=gettxinfo&txhash=<hash>
ABI:     {BLOCKSCOUT_API_URL}?module=contract&action=getabi&address=<addr>
"""
import logging

from .. import abi_decoder
from ..blockchains import TRANSACTION_ID_PLACEHOLDER, get_hash_prefixes
from ..configuration import config
from ..errors import MalformedResponseError
from ..models import CanonicalTransactionRecord, ExplorerBackend, ParsingContext, SupportedChains
from ..normalizers import check_confirmations, strip_hash_prefix, to_time

logger = logging.getLogger(__name__)

SERVICE_NAME = "blockscout"


def get_transaction_service_url(chain: SupportedChains = None) -> str:
    return f"{config.BLOCKSCOUT_API_URL}?module=transaction&action=gettxinfo&txhash={TRANSACTION_ID_PLACEHOLDER}"


def get_abi_service_url(address: str) -> str:
    return f"{config.BLOCKSCOUT_API_URL}?module=contract&action=getabi&address={address}"


async def parse_blockscout_response(context: ParsingContext) -> CanonicalTransactionRecord:
    """gettxinfo 응답을 정규화. 수신 주소가 있으면 ABI 디코딩 시도"""
    raw = context.raw_response
    data = raw.get("result") if isinstance(raw, dict) else None
    if not isinstance(data, dict) or not data:
        raise MalformedResponseError("Invalid Blockscout response")

    issuing_address = str(data.get("from") or "")
    # Blockscout 버전에 따라 input 또는 data
    input_hex = str(data.get("input") or data.get("data") or "")
    if not issuing_address or not input_hex:
        raise MalformedResponseError("Missing input/from in Blockscout result")

    remote_hex = input_hex
    if data.get("to"):
        decoded = await abi_decoder.decode(context.request, get_abi_service_url(str(data["to"])), input_hex)
        if decoded:
            logger.debug(f"[{SERVICE_NAME}] ABI 디코딩 값 사용: {decoded}")
            remote_hex = decoded

    remote_hash = strip_hash_prefix(remote_hex, get_hash_prefixes(context.chain))
    timestamp = data.get("timeStamp")
    time = to_time(timestamp if timestamp is not None else data.get("timestamp"))
    check_confirmations(data.get("confirmations", 0), context.min_confirmations)

    return CanonicalTransactionRecord(
        remote_hash=remote_hash,
        issuing_address=issuing_address,
        time=time,
        revoked_addresses=(),
    )


explorer_api = ExplorerBackend(
    service_url=get_transaction_service_url,
    service_name=SERVICE_NAME,
    parse=parse_blockscout_response,
    priority=-1,
)
