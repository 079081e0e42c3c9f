"""
익스플로러 응답 값 정규화 (해시, 타임스탬프, 컨펌 수)
"""
import json
import math
import re
import logging
from datetime import datetime, timezone
from typing import Any, Iterable, Optional

from .errors import InsufficientConfirmationsError, MalformedResponseError

logger = logging.getLogger(__name__)

EPOCH = datetime.fromtimestamp(0, tz=timezone.utc)
HASH_HEX_PATTERN = re.compile(r"^[0-9a-f]{64}$")


def load_json(body: Any) -> Any:
    """응답 본문을 JSON으로 파싱. 이미 파싱된 값은 그대로 반환"""
    if not isinstance(body, (str, bytes, bytearray)):
        return body
    try:
        return json.loads(body)
    except ValueError as e:
        raise MalformedResponseError(f"JSON 파싱 실패 → {e}. 응답 본문: {str(body)[:200]}") from e


def strip_hash_prefix(remote_hash: str, prefixes: Iterable[str]) -> str:
    """체인 접두사와 0x를 제거하고 64자리 소문자 hex 해시를 반환"""
    if not isinstance(remote_hash, str):
        raise MalformedResponseError(f"앵커 페이로드가 문자열이 아닙니다: {remote_hash!r}")

    stripped = remote_hash.strip()
    for prefix in prefixes:
        if stripped[:len(prefix)].lower() == prefix.lower():
            stripped = stripped[len(prefix):]
            break
    if stripped[:2].lower() == "0x":
        stripped = stripped[2:]
    stripped = stripped.lower()

    if not HASH_HEX_PATTERN.match(stripped):
        raise MalformedResponseError(f"유효한 해시가 아닙니다: {remote_hash!r}")
    return stripped


def to_time(value: Any) -> datetime:
    """초 단위 타임스탬프(10진수, 0x hex, 숫자)를 UTC datetime으로 변환. 실패 시 epoch"""
    if value is None:
        return EPOCH
    try:
        if isinstance(value, str) and value.startswith("0x"):
            seconds = int(value, 16)
        else:
            seconds = float(value)
        if not math.isfinite(seconds):
            return EPOCH
        return datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (TypeError, ValueError, OverflowError, OSError):
        logger.debug(f"타임스탬프 변환 실패: {value!r} → epoch 사용")
        return EPOCH


def to_int(value: Any) -> Optional[int]:
    """정수, 10진수 문자열, 0x hex 문자열을 정수로 변환. 변환 불가 시 None"""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        if isinstance(value, float):
            return int(value) if math.isfinite(value) else None
        text = str(value).strip()
        if text.lower().startswith("0x"):
            return int(text, 16)
        try:
            return int(text)
        except ValueError:
            number = float(text)
            return int(number) if math.isfinite(number) else None
    except (TypeError, ValueError):
        return None


def check_confirmations(confirmations: Any, minimum: int) -> int:
    """컨펌 수가 최소값 이상인지 확인. 변환 불가 값은 0으로 취급"""
    count = to_int(confirmations)
    if count is None:
        count = 0
    if count < minimum:
        raise InsufficientConfirmationsError(count, minimum)
    return count
