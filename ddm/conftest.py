import matplotlib
import pytest

from ddm.domain.types import ValuationInput
from ddm.scenarios.config import CalculatorConfig

matplotlib.use('Agg')


@pytest.fixture
def growth_inputs() -> ValuationInput:
  """Textbook Gordon growth case: D0=2.00, r=10%, g=4%."""
  return ValuationInput(
      d0=2.0,
      required_return=10.0,
      constant_growth=4.0,
      short_growth=20.0,
      long_growth=4.0,
      short_years=3,
  )


@pytest.fixture
def two_stage_inputs() -> ValuationInput:
  """Two-stage case: D0=2.00, r=12%, 20% for 3 years then 4%."""
  return ValuationInput(
      d0=2.0,
      required_return=12.0,
      constant_growth=4.0,
      short_growth=20.0,
      long_growth=4.0,
      short_years=3,
  )


@pytest.fixture
def invalid_inputs() -> ValuationInput:
  """Growth rates equal to the required return (all growth models invalid)."""
  return ValuationInput(
      d0=2.0,
      required_return=8.0,
      constant_growth=8.0,
      short_growth=15.0,
      long_growth=8.0,
      short_years=5,
  )


@pytest.fixture
def default_config() -> CalculatorConfig:
  return CalculatorConfig.default()
