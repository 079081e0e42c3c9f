"""
앵커 조회 과정에서 사용하는 예외 정의
"""
from typing import List, Optional, Tuple


class AnchorResolutionError(Exception):
    """앵커 조회 예외의 기본 클래스"""


class MalformedResponseError(AnchorResolutionError):
    """익스플로러 응답에 필수 필드가 없거나 비어 있음"""


class InsufficientConfirmationsError(AnchorResolutionError):
    """컨펌 수가 설정된 최소값보다 작음"""

    def __init__(self, confirmations: int, minimum: int):
        self.confirmations = confirmations
        self.minimum = minimum
        super().__init__(f"Not enough confirmations ({confirmations} < {minimum})")


class TransportError(AnchorResolutionError):
    """HTTP 요청 실패 (네트워크 오류, 비정상 상태코드)"""

    def __init__(self, url: str, message: str, status_code: Optional[int] = None):
        self.url = url
        self.status_code = status_code
        super().__init__(message)


class DecodeError(AnchorResolutionError):
    """ABI 조회 또는 입력 데이터 디코딩 실패 (디코더 내부에서만 사용)"""


class UnsupportedChainError(AnchorResolutionError):
    """등록된 익스플로러가 없는 체인"""


class UnableToGetRemoteHashError(AnchorResolutionError):
    """체인에 등록된 모든 익스플로러가 실패함"""

    def __init__(self, chain: str, failures: Optional[List[Tuple[str, Exception]]] = None):
        self.chain = chain
        # (service_name, 예외) 목록 - 진단용
        self.failures = list(failures or [])
        super().__init__("Unable to get remote hash")
