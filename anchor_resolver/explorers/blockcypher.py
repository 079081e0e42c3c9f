import logging
import re
from datetime import datetime, timezone

from ..blockchains import TRANSACTION_ID_PLACEHOLDER, get_hash_prefixes
from ..configuration import config
from ..errors import MalformedResponseError, UnsupportedChainError
from ..models import CanonicalTransactionRecord, ExplorerBackend, ParsingContext, SupportedChains
from ..normalizers import EPOCH, check_confirmations, strip_hash_prefix

logger = logging.getLogger(__name__)

SERVICE_NAME = "blockcypher"

# 소수점 이하 자리수가 가변적 (예: .4, .15, .123)
FRACTION_PATTERN = re.compile(r"\.(\d+)")

NETWORK_PATHS = {
    SupportedChains.BITCOIN: "btc/main",
    SupportedChains.TESTNET: "btc/test3",
}


def get_transaction_service_url(chain: SupportedChains) -> str:
    chain = SupportedChains(chain)
    if chain not in NETWORK_PATHS:
        raise UnsupportedChainError(f"Blockcypher에서 지원하지 않는 체인입니다: {chain.value}")
    url = f"{config.BLOCKCYPHER_API_URL}/{NETWORK_PATHS[chain]}/txs/{TRANSACTION_ID_PLACEHOLDER}?limit=500"
    return f"{url}&token={config.BLOCKCYPHER_API_TOKEN}" if config.BLOCKCYPHER_API_TOKEN else url


def _iso_to_time(value) -> datetime:
    # 예: 2019-06-02T08:38:26Z, 2019-06-02T08:38:26.15Z
    if not isinstance(value, str) or not value:
        return EPOCH
    # 3.11 미만의 fromisoformat은 3자리 또는 6자리 소수만 허용
    normalized = FRACTION_PATTERN.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), value, count=1)
    try:
        parsed = datetime.fromisoformat(normalized.replace("Z", "+00:00"))
    except ValueError:
        logger.debug(f"[{SERVICE_NAME}] 시간 변환 실패: {value!r}")
        return EPOCH
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


async def parse_blockcypher_response(context: ParsingContext) -> CanonicalTransactionRecord:
    data = context.raw_response
    if not isinstance(data, dict) or not data.get("outputs") or not data.get("inputs"):
        raise MalformedResponseError("Invalid Blockcypher response")

    outputs = data["outputs"]
    issuing_address = (data["inputs"][0].get("addresses") or [None])[0]
    anchor_script = outputs[-1].get("script")
    if not issuing_address or not anchor_script:
        raise MalformedResponseError("Missing issuing address/OP_RETURN output in Blockcypher result")

    check_confirmations(data.get("confirmations", 0), context.min_confirmations)

    remote_hash = strip_hash_prefix(anchor_script, get_hash_prefixes(context.chain))
    time = _iso_to_time(data.get("confirmed") or data.get("received"))
    revoked_addresses = tuple(output["addresses"][0] for output in outputs if output.get("addresses"))

    return CanonicalTransactionRecord(
        remote_hash=remote_hash,
        issuing_address=issuing_address,
        time=time,
        revoked_addresses=revoked_addresses,
    )


explorer_api = ExplorerBackend(
    service_url=get_transaction_service_url,
    service_name=SERVICE_NAME,
    parse=parse_blockcypher_response,
    priority=0,
)
