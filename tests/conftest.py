"""
테스트 공통 fixture
"""
import json

import pytest

from anchor_resolver.errors import TransportError

ANCHOR_HASH = "ec049a808a09f3e8e257401e0898aa3d32a733706fd7d16aacf0ba95f7b42c0c"
ISSUING_ADDRESS = "0x3d995ef85a8d1bcbed78182ab225b9f88dc8937c"


class FakeTransport:
    """호출 순서대로 응답을 돌려주는 가짜 전송 함수. 예외 객체는 raise"""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    async def __call__(self, url: str) -> str:
        self.calls.append(url)
        if not self.responses:
            raise TransportError(url, "no canned response")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response if isinstance(response, str) else json.dumps(response)


@pytest.fixture
def blockscout_response():
    """Blockscout gettxinfo 응답 (to 없음)"""
    return {
        "status": "1",
        "message": "OK",
        "result": {
            "hash": "0xabc",
            "from": ISSUING_ADDRESS,
            "input": "0x" + ANCHOR_HASH,
            # 0x5f5e100 = 100000000초 → 1973-03-03T09:46:40Z
            "timeStamp": "0x5f5e100",
            "confirmations": "12",
        },
    }
