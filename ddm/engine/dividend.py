"""
Pure dividend discount math engine.

This module contains pure functions for the three dividend discount models.
No pandas, no I/O, just numeric computations on a ValuationInput.

Invalid parameter combinations (g >= r, or r == 0 for the constant model)
are not errors: the price is returned as nan and callers branch on
ValuationResult.is_valid.

Key functions:
  constant_dividend: P = D0 / r
  constant_growth: Gordon growth, P = D0(1+g) / (r-g)
  changing_growth: Two-stage model, PV of high growth plus discounted TV
"""

import math
from typing import Dict, Tuple

from ddm.domain.types import CashFlow
from ddm.domain.types import ValuationInput
from ddm.domain.types import ValuationResult

DEFAULT_HORIZON = 10

_NAN = float('nan')


def _power(base: float, exponent: int) -> float:
  '''base**exponent, saturating to a signed inf instead of raising.'''
  try:
    return base**exponent
  except OverflowError:
    if base < 0 and exponent % 2:
      return -math.inf
    return math.inf
  except ZeroDivisionError:
    # 0.0 to a negative power
    return math.inf


def _divide(numerator: float, denominator: float) -> float:
  '''numerator / denominator, with x/0 giving a signed inf and 0/0 nan.'''
  if denominator == 0:
    if numerator == 0 or math.isnan(numerator):
      return _NAN
    return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)
  return numerator / denominator


def compute_pv_high_growth(
    d0: float,
    g_short: float,
    discount_rate: float,
    n_years: int,
) -> Tuple[float, float]:
  """
  Compute present value of the high-growth phase.

  Args:
    d0: Base dividend
    g_short: High-growth rate (decimal)
    discount_rate: Required return (decimal)
    n_years: Length of the high-growth phase

  Returns:
    Tuple of (pv_total, final_dividend):
    - pv_total: Sum of D0(1+gs)^t / (1+r)^t for t = 1..n
    - final_dividend: D0(1+gs)^n, the dividend at the end of the phase
  """
  pv = 0.0
  for t in range(1, n_years + 1):
    dividend = d0 * _power(1.0 + g_short, t)
    pv += _divide(dividend, _power(1.0 + discount_rate, t))

  final_dividend = d0 * _power(1.0 + g_short, max(n_years, 0))
  return pv, final_dividend


def compute_terminal_value(
    final_dividend: float,
    g_terminal: float,
    discount_rate: float,
    final_year: int,
) -> float:
  """
  Compute discounted terminal value using Gordon Growth Model.

  Args:
    final_dividend: Dividend in the final high-growth year
    g_terminal: Perpetual growth rate after the final year (decimal)
    discount_rate: Required return (decimal)
    final_year: Number of years to discount back

  Returns:
    Present value of terminal value, or nan if discount_rate <= g_terminal
  """
  if discount_rate <= g_terminal:
    return _NAN

  tv = _divide(final_dividend * (1.0 + g_terminal),
               discount_rate - g_terminal)
  return _divide(tv, _power(1.0 + discount_rate, final_year))


def growth_schedule(
    d0: float,
    growth: float,
    horizon: int,
) -> Tuple[CashFlow, ...]:
  '''Dividends D0(1+g)^t for years 0..horizon.'''
  return tuple(
      CashFlow(year=t, dividend=d0 * _power(1.0 + growth, t))
      for t in range(horizon + 1))


def two_stage_schedule(
    d0: float,
    g_short: float,
    g_long: float,
    n_years: int,
    horizon: int,
) -> Tuple[CashFlow, ...]:
  '''
  Dividends compounding at g_short through year n, then at g_long.

  The schedule always reaches at least year n + 1 so the first terminal
  phase dividend is visible.
  '''
  last_year = max(horizon, n_years + 1)
  flows = []
  for t in range(last_year + 1):
    if t <= n_years:
      dividend = d0 * _power(1.0 + g_short, t)
    else:
      dividend = (d0 * _power(1.0 + g_short, n_years) *
                  _power(1.0 + g_long, t - n_years))
    flows.append(CashFlow(year=t, dividend=dividend))
  return tuple(flows)


def constant_dividend(inputs: ValuationInput) -> ValuationResult:
  '''
  Value a perpetuity paying D0 every year: P = D0 / r.

  The schedule holds a single year-0 entry, the perpetuity payment.
  '''
  cash_flows = (CashFlow(year=0, dividend=inputs.d0),)

  if inputs.required_return == 0:
    return ValuationResult(model='constant', price=_NAN, cash_flows=cash_flows)

  return ValuationResult(model='constant',
                         price=_divide(inputs.d0, inputs.r),
                         cash_flows=cash_flows)


def constant_growth(
    inputs: ValuationInput,
    horizon: int = DEFAULT_HORIZON,
) -> ValuationResult:
  '''
  Value with the Gordon Growth Model: P = D1 / (r - g), D1 = D0(1+g).

  Invalid (nan) whenever constant_growth >= required_return.
  '''
  cash_flows = growth_schedule(inputs.d0, inputs.g, horizon)

  if inputs.constant_growth >= inputs.required_return:
    return ValuationResult(model='growth', price=_NAN, cash_flows=cash_flows)

  d1 = inputs.d0 * (1.0 + inputs.g)
  return ValuationResult(model='growth',
                         price=_divide(d1, inputs.r - inputs.g),
                         cash_flows=cash_flows)


def changing_growth(
    inputs: ValuationInput,
    horizon: int = DEFAULT_HORIZON,
) -> ValuationResult:
  '''
  Value with the two-stage (changing growth) model.

  Stage 1: Dividends grow at short_growth for short_years, each discounted
  Stage 2: Terminal value via Gordon growth at long_growth, discounted n years

  Invalid (nan) whenever long_growth >= required_return; the terminal term
  is not computed in that case.
  '''
  n_years = inputs.short_years
  cash_flows = two_stage_schedule(inputs.d0, inputs.g_short, inputs.g_long,
                                  n_years, horizon)

  pv_high, final_dividend = compute_pv_high_growth(inputs.d0, inputs.g_short,
                                                   inputs.r, n_years)

  if inputs.long_growth >= inputs.required_return:
    return ValuationResult(model='changing',
                           price=_NAN,
                           cash_flows=cash_flows,
                           pv_high_growth=pv_high)

  pv_terminal = compute_terminal_value(final_dividend, inputs.g_long,
                                       inputs.r, n_years)

  return ValuationResult(model='changing',
                         price=pv_high + pv_terminal,
                         cash_flows=cash_flows,
                         pv_high_growth=pv_high,
                         pv_terminal=pv_terminal)


def value_all(
    inputs: ValuationInput,
    horizon: int = DEFAULT_HORIZON,
) -> Dict[str, ValuationResult]:
  '''Evaluate all three models on the same inputs, keyed by model.'''
  return {
      'constant': constant_dividend(inputs),
      'growth': constant_growth(inputs, horizon),
      'changing': changing_growth(inputs, horizon),
  }
