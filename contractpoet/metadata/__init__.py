"""
Import of contracts from compiled metadata
"""

from .models import read_contract
from .specs import to_contract

__all__ = ["read_contract", "to_contract"]
