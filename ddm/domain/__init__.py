"""Domain types for the dividend discount calculator."""

from ddm.domain.types import CashFlow
from ddm.domain.types import MODEL_KEYS
from ddm.domain.types import ValuationInput
from ddm.domain.types import ValuationResult

__all__ = [
    'CashFlow',
    'MODEL_KEYS',
    'ValuationInput',
    'ValuationResult',
]
