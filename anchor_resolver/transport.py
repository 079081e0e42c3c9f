import logging
from typing import Optional

import certifi
import httpx

from .configuration import config
from .errors import TransportError

# 로거 설정
logger = logging.getLogger(__name__)


async def request(url: str, timeout: Optional[float] = None) -> str:
    """GET 요청 후 응답 본문을 반환. 실패는 TransportError로 변환"""
    request_headers = {"User-Agent": config.USER_AGENT}
    timeout = timeout if timeout is not None else config.REQUEST_TIMEOUT

    try:
        async with httpx.AsyncClient(verify=certifi.where()) as client:
            res = await client.get(url, headers=request_headers, timeout=timeout)
            logger.debug(f"응답 상태코드: {res.status_code} ({url})")
            res.raise_for_status()
            return res.text
    except httpx.HTTPStatusError as e:
        status_code = e.response.status_code
        # 404, 400은 트랜잭션이 없는 정상적인 실패
        if status_code in [404, 400]:
            logger.debug(f"HTTP {status_code} (트랜잭션을 찾을 수 없음): {url}")
        else:
            logger.warning(f"HTTP 오류 (상태코드: {status_code}) → {e}. API: {url}")
        raise TransportError(url, f"HTTP {status_code}", status_code=status_code) from e
    except httpx.RequestError as e:
        logger.warning(f"요청 오류 → {e}. API: {url}")
        raise TransportError(url, f"요청 오류: {e}") from e
