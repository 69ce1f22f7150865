'''
Domain types for the dividend discount calculator.

These frozen dataclasses are the contract between the valuation engine and
the renderers. Rates are carried as percents (8.0 means 8%) the way a user
enters them; the decimal properties are what the formulas consume.
'''

from dataclasses import dataclass
from functools import cached_property
import math
from typing import Any, Dict, Tuple

MODEL_KEYS: Tuple[str, ...] = ('constant', 'growth', 'changing')


@dataclass(frozen=True)
class ValuationInput:
  '''
  Scalar inputs shared by all three models.

  Attributes:
    d0: Base (most recent) dividend per share
    required_return: Required return, percent
    constant_growth: Perpetual growth for the constant growth model, percent
    short_growth: High-growth rate for the first short_years, percent
    long_growth: Perpetual growth after the high-growth phase, percent
    short_years: Length of the high-growth phase (n)
  '''
  d0: float
  required_return: float
  constant_growth: float = 0.0
  short_growth: float = 0.0
  long_growth: float = 0.0
  short_years: int = 0

  @property
  def r(self) -> float:
    '''Required return as a decimal.'''
    return self.required_return / 100.0

  @property
  def g(self) -> float:
    '''Constant growth rate as a decimal.'''
    return self.constant_growth / 100.0

  @property
  def g_short(self) -> float:
    return self.short_growth / 100.0

  @property
  def g_long(self) -> float:
    return self.long_growth / 100.0


@dataclass(frozen=True)
class CashFlow:
  '''
  Projected dividend for one year of a model's display schedule.

  Year 0 is the reference point (the current dividend D0).
  '''
  year: int
  dividend: float


@dataclass(frozen=True)
class ValuationResult:
  '''
  Output of one valuation model.

  Attributes:
    model: Model key ('constant', 'growth' or 'changing')
    price: Present value per share, nan when the inputs are invalid
    cash_flows: Display schedule ordered by year; not summed into price
    pv_high_growth: PV of the high-growth phase (changing model only)
    pv_terminal: Discounted terminal value (changing model only)
  '''
  model: str
  price: float
  cash_flows: Tuple[CashFlow, ...] = ()
  pv_high_growth: float = float('nan')
  pv_terminal: float = float('nan')

  @property
  def is_valid(self) -> bool:
    return math.isfinite(self.price)

  @property
  def years(self) -> Tuple[int, ...]:
    return tuple(cf.year for cf in self.cash_flows)

  @cached_property
  def dividends(self) -> Dict[int, float]:
    '''Schedule as a year -> dividend mapping, built once per result.'''
    return {cf.year: cf.dividend for cf in self.cash_flows}

  def dividend_for(self, year: int) -> float:
    '''Dividend scheduled for year, or 0.0 when the schedule has no entry.'''
    return self.dividends.get(year, 0.0)

  def total_received(self) -> float:
    '''Sum of the positive scheduled dividends.'''
    return sum(cf.dividend for cf in self.cash_flows if cf.dividend > 0)

  def to_dict(self) -> Dict[str, Any]:
    '''Flatten to a dictionary for DataFrame rows.'''
    return {
        'model': self.model,
        'price': self.price,
        'is_valid': self.is_valid,
        'pv_high_growth': self.pv_high_growth,
        'pv_terminal': self.pv_terminal,
        'n_cash_flows': len(self.cash_flows),
    }
