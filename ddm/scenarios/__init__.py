"""Calculator configuration and model registry."""

from ddm.scenarios.config import CalculatorConfig
from ddm.scenarios.registry import evaluate
from ddm.scenarios.registry import list_models
from ddm.scenarios.registry import MODEL_REGISTRY
from ddm.scenarios.registry import resolve_models

__all__ = [
  'CalculatorConfig',
  'MODEL_REGISTRY',
  'evaluate',
  'list_models',
  'resolve_models',
]
