"""
Calculator configuration.

CalculatorConfig is a serializable (JSON-friendly) record of everything the
calculator needs for one recalculation: the model inputs, which model(s) to
show, the display horizon and the currency label used by the renderers.
"""

from dataclasses import asdict
from dataclasses import dataclass
import json
from pathlib import Path
from typing import Any

from ddm.domain.types import MODEL_KEYS
from ddm.domain.types import ValuationInput
from ddm.engine.dividend import DEFAULT_HORIZON


@dataclass
class CalculatorConfig:
  """
  Configuration for one calculator run.

  Attributes:
    name: Human-readable preset name
    d0: Base dividend
    required_return: Required return, percent
    constant_growth: Growth for the constant growth model, percent
    short_growth: High-growth rate for the changing model, percent
    long_growth: Long-term growth for the changing model, percent
    short_years: Length of the high-growth phase
    model: Model to show ('constant', 'growth', 'changing' or 'all')
    horizon: Number of projected years in the display schedules
    currency: Currency label used in tables, charts and equations
  """
  name: str = 'default'
  d0: float = 2.0
  required_return: float = 10.0
  constant_growth: float = 4.0
  short_growth: float = 20.0
  long_growth: float = 4.0
  short_years: int = 3
  model: str = 'all'
  horizon: int = DEFAULT_HORIZON
  currency: str = 'USD'

  @classmethod
  def default(cls) -> 'CalculatorConfig':
    """
    Create default calculator configuration.

    Uses:
      - D0 of 2.00
      - 10% required return
      - 4% constant growth
      - 20% growth for 3 years, then 4%
      - All models shown over a 10-year schedule
    """
    return cls()

  @classmethod
  def two_stage(cls) -> 'CalculatorConfig':
    """Two-stage example: 20% for 3 years then 4%, discounted at 12%."""
    return cls(
        name='two_stage',
        d0=2.0,
        required_return=12.0,
        constant_growth=4.0,
        short_growth=20.0,
        long_growth=4.0,
        short_years=3,
        model='changing',
    )

  @classmethod
  def preset(cls, name: str) -> 'CalculatorConfig':
    """Look up a named preset."""
    presets = {
        'default': cls.default,
        'two_stage': cls.two_stage,
    }
    if name not in presets:
      raise ValueError(f'Unknown preset: {name}. '
                       f'Available: {", ".join(presets)}')
    return presets[name]()

  def validate(self) -> None:
    """Raise ValueError for settings the calculator cannot display."""
    if self.model != 'all' and self.model not in MODEL_KEYS:
      raise ValueError(f'Unknown model: {self.model}. '
                       f'Available: all, {", ".join(MODEL_KEYS)}')
    if self.horizon < 0:
      raise ValueError(f'horizon must be >= 0, got {self.horizon}')
    if self.short_years < 0:
      raise ValueError(f'short_years must be >= 0, got {self.short_years}')

  def to_inputs(self) -> ValuationInput:
    """Build the engine input record."""
    return ValuationInput(
        d0=float(self.d0),
        required_return=float(self.required_return),
        constant_growth=float(self.constant_growth),
        short_growth=float(self.short_growth),
        long_growth=float(self.long_growth),
        short_years=int(self.short_years),
    )

  def to_dict(self) -> dict[str, Any]:
    """Convert to dictionary."""
    return asdict(self)

  def to_json(self) -> str:
    """Serialize to JSON string."""
    return json.dumps(self.to_dict(), indent=2)

  @classmethod
  def from_dict(cls, data: dict[str, Any]) -> 'CalculatorConfig':
    """Create from dictionary."""
    return cls(**data)

  @classmethod
  def from_json(cls, json_str: str) -> 'CalculatorConfig':
    """Create from JSON string."""
    return cls.from_dict(json.loads(json_str))

  @classmethod
  def from_file(cls, path: Path) -> 'CalculatorConfig':
    """Load from a JSON file."""
    if not path.exists():
      raise FileNotFoundError(f'Config not found: {path}')
    return cls.from_json(path.read_text(encoding='utf-8'))
