"""
블록체인 앵커 트랜잭션 조회 패키지
"""
from .configuration import config, AnchorConfiguration
from .errors import (
    AnchorResolutionError,
    InsufficientConfirmationsError,
    MalformedResponseError,
    TransportError,
    UnableToGetRemoteHashError,
    UnsupportedChainError,
)
from .models import CanonicalTransactionRecord, ExplorerBackend, ParsingContext, SupportedChains
from .registry import ChainExplorerRegistry, default_registry, resolve_anchor

__all__ = [
    'config',
    'AnchorConfiguration',
    'AnchorResolutionError',
    'InsufficientConfirmationsError',
    'MalformedResponseError',
    'TransportError',
    'UnableToGetRemoteHashError',
    'UnsupportedChainError',
    'CanonicalTransactionRecord',
    'ExplorerBackend',
    'ParsingContext',
    'SupportedChains',
    'ChainExplorerRegistry',
    'default_registry',
    'resolve_anchor',
]
