"""
Model registry for mapping model keys to engine functions.

Every consumer (renderers, CLI, sensitivity analysis) dispatches on the
model key through this registry instead of special-casing each model.

To add a new model:
1. Implement the pure function in engine/dividend.py
2. Add its key to MODEL_KEYS in domain/types.py
3. Register it in MODEL_REGISTRY below
"""

from collections.abc import Callable
import logging
from typing import Dict, List

from ddm.domain.types import MODEL_KEYS
from ddm.domain.types import ValuationInput
from ddm.domain.types import ValuationResult
from ddm.engine.dividend import changing_growth
from ddm.engine.dividend import constant_dividend
from ddm.engine.dividend import constant_growth
from ddm.engine.dividend import DEFAULT_HORIZON

logger = logging.getLogger(__name__)

MODEL_REGISTRY: Dict[str, Callable[[ValuationInput, int], ValuationResult]] = {
    'constant':
        lambda inputs, horizon: constant_dividend(inputs),
    'growth':
        constant_growth,
    'changing':
        changing_growth,
}


def list_models() -> List[str]:
  """List registered model keys in display order."""
  return [key for key in MODEL_KEYS if key in MODEL_REGISTRY]


def resolve_models(selected: str) -> List[str]:
  """
  Expand a model selection into model keys.

  Args:
    selected: A model key or 'all'

  Returns:
    List of model keys to evaluate, in display order

  Raises:
    ValueError: If selected is not 'all' or a registered model key
  """
  if selected == 'all':
    return list_models()
  if selected not in MODEL_REGISTRY:
    raise ValueError(f'Unknown model: {selected}. '
                     f'Available: all, {", ".join(list_models())}')
  return [selected]


def evaluate(
    inputs: ValuationInput,
    selected: str = 'all',
    horizon: int = DEFAULT_HORIZON,
) -> Dict[str, ValuationResult]:
  """
  Evaluate the selected model(s).

  Args:
    inputs: Engine inputs
    selected: A model key or 'all'
    horizon: Display schedule length in years

  Returns:
    Dictionary of model key to ValuationResult, in display order
  """
  results = {}
  for key in resolve_models(selected):
    result = MODEL_REGISTRY[key](inputs, horizon)
    if not result.is_valid:
      logger.debug('%s: invalid parameters, price is nan', key)
    results[key] = result
  return results
