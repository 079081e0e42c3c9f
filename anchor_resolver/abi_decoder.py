"""
컨트랙트 ABI를 이용한 트랜잭션 입력 디코딩

입력 데이터를 그대로 해시로 쓸 수 없을 때(컨트랙트 호출) ABI를 받아 디코딩하고,
디코딩된 값 중 첫 번째 32바이트 hex 문자열을 앵커 해시 후보로 사용한다.
모든 실패는 내부에서 처리되고 None을 반환한다.
"""
import json
import logging
import re
from typing import Any, Dict, List, Optional

from eth_abi import decode as abi_decode
from eth_utils import keccak

from .errors import DecodeError
from .models import Transport

logger = logging.getLogger(__name__)

HASH_32_PATTERN = re.compile(r"^0x[0-9a-fA-F]{64}$")


async def get_smart_contract_abi(request: Transport, abi_url: str) -> Optional[List[dict]]:
    """ABI 조회. result가 JSON 문자열이면 한 번 더 파싱"""
    try:
        body = await request(abi_url)
        data = json.loads(body)
        raw = data.get("result") if isinstance(data, dict) else None
        if not raw:
            return None
        abi = json.loads(raw) if isinstance(raw, str) else raw
        if not isinstance(abi, list):
            logger.debug(f"ABI 형식이 올바르지 않습니다: {type(abi).__name__}. API: {abi_url}")
            return None
        return abi
    except Exception as e:
        logger.debug(f"ABI 조회 실패 → {e}. API: {abi_url}")
        return None


def _canonical_type(param: dict) -> str:
    # tuple은 components로 펼쳐서 시그니처에 사용 (예: tuple[] → (bytes32,uint256)[])
    abi_type = param["type"]
    if abi_type.startswith("tuple"):
        inner = ",".join(_canonical_type(c) for c in param.get("components", []))
        return f"({inner}){abi_type[len('tuple'):]}"
    return abi_type


def _to_plain(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray)):
        return "0x" + bytes(value).hex()
    if isinstance(value, (list, tuple)):
        return [_to_plain(v) for v in value]
    return value


def decode_function_input(abi: List[dict], input_hex: str) -> Optional[Dict[str, Any]]:
    """selector가 일치하는 함수로 입력을 디코딩. 일치하는 함수가 없으면 None"""
    hex_body = input_hex[2:] if input_hex[:2].lower() == "0x" else input_hex
    try:
        data = bytes.fromhex(hex_body)
    except ValueError as e:
        raise DecodeError(f"입력 데이터가 hex가 아닙니다: {input_hex[:20]}...") from e
    if len(data) < 4:
        return None

    for entry in abi:
        if entry.get("type", "function") != "function" or not entry.get("name"):
            continue
        params = entry.get("inputs", [])
        types = [_canonical_type(p) for p in params]
        signature = f"{entry['name']}({','.join(types)})"
        if keccak(text=signature)[:4] != data[:4]:
            continue
        values = abi_decode(types, data[4:])
        return {
            "method": entry["name"],
            "types": types,
            "names": [p.get("name", "") for p in params],
            "inputs": [_to_plain(v) for v in values],
        }
    return None


def find_hash_candidate(value: Any) -> Optional[str]:
    """디코딩 결과를 재귀적으로 탐색해 첫 번째 0x + 64 hex 문자열을 반환"""
    if isinstance(value, str):
        return value if HASH_32_PATTERN.match(value) else None
    if isinstance(value, dict):
        items = value.values()
    elif isinstance(value, (list, tuple)):
        items = value
    else:
        return None
    for item in items:
        found = find_hash_candidate(item)
        if found:
            return found
    return None


def decode_input_with_abi(abi: Optional[List[dict]], input_hex: str) -> Optional[str]:
    if not abi or not input_hex:
        return None
    try:
        decoded = decode_function_input(abi, input_hex)
        if decoded is None:
            logger.debug("ABI에 일치하는 함수 selector가 없습니다.")
            return None
        # inputs 우선, 없으면 전체 구조 탐색
        candidate = None
        for item in decoded["inputs"]:
            candidate = find_hash_candidate(item)
            if candidate:
                break
        return candidate or find_hash_candidate(decoded)
    except Exception as e:
        logger.debug(f"입력 데이터 디코딩 실패 → {e}")
        return None


async def decode(request: Transport, abi_url: str, input_hex: str) -> Optional[str]:
    """ABI 조회 후 입력 디코딩. 어떤 실패든 None"""
    abi = await get_smart_contract_abi(request, abi_url)
    if abi is None:
        return None
    return decode_input_with_abi(abi, input_hex)
