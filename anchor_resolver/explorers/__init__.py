# Explorers package
from . import blockcypher, blockscout, blockstream, etherscan

__all__ = [
    "blockcypher",
    "blockscout",
    "blockstream",
    "etherscan",
]
