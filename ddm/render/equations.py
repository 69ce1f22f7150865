'''
Model equations with the current inputs substituted.

A single formatter dispatches on the model key; each variant fills the same
Equation record so consumers do not care which model they display.
'''

from collections.abc import Callable
from dataclasses import dataclass
from typing import Dict, Optional

from ddm.domain.types import ValuationInput
from ddm.domain.types import ValuationResult
from ddm.render.formatting import format_currency
from ddm.render.formatting import format_percent
from ddm.render.formatting import MINUS
from ddm.render.styles import MODEL_NAMES


@dataclass(frozen=True)
class Equation:
  '''
  Display-ready equation for one model.

  Attributes:
    model: Model key
    formula: Symbolic formula
    substituted: Formula with the input values filled in
    result: "= USD 34.67", or "Invalid"
    label: Accessible description read by screen readers
    breakdown: Component summary (changing model only)
    error: Reason the result is invalid, if it is
  '''
  model: str
  formula: str
  substituted: str
  result: str
  label: str
  breakdown: Optional[str] = None
  error: Optional[str] = None

  @property
  def is_valid(self) -> bool:
    return self.error is None


def _result_text(price: float, currency: str) -> str:
  return f'= {format_currency(price, symbol=currency)}'


def _constant_equation(
    inputs: ValuationInput,
    result: ValuationResult,
    currency: str,
) -> Equation:
  d0 = format_currency(inputs.d0, symbol=currency)
  r = format_percent(inputs.required_return)
  substituted = f'P = {d0} / {r}'

  if not result.is_valid:
    return Equation(
        model='constant',
        formula='P = D0 / r',
        substituted=substituted,
        result='Invalid',
        label=(f'{MODEL_NAMES["constant"]} Model equation: Invalid result. '
               f'Required return must not be zero'),
        error='Invalid (r must not be 0)',
    )

  price = format_currency(result.price, symbol=currency)
  return Equation(
      model='constant',
      formula='P = D0 / r',
      substituted=substituted,
      result=_result_text(result.price, currency),
      label=(f'{MODEL_NAMES["constant"]} Model equation: Price equals {d0} '
             f'divided by {inputs.required_return:.1f} percent '
             f'(i.e. {inputs.r:.4f}) which equals {price}'),
  )


def _growth_equation(
    inputs: ValuationInput,
    result: ValuationResult,
    currency: str,
) -> Equation:
  d1_value = inputs.d0 * (1.0 + inputs.g)
  d1 = format_currency(d1_value, symbol=currency)
  r = format_percent(inputs.required_return)
  g = format_percent(inputs.constant_growth)
  formula = f'PV_t = D1 / (r {MINUS} g)'
  substituted = f'PV_t = {d1} / ({r} {MINUS} {g})'

  if not result.is_valid:
    return Equation(
        model='growth',
        formula=formula,
        substituted=substituted,
        result='Invalid',
        label=(f'{MODEL_NAMES["growth"]} Model equation: Invalid result. '
               f'Growth rate {inputs.constant_growth:.1f} percent must be '
               f'less than required return {inputs.required_return:.1f} '
               f'percent'),
        error='Invalid (g must be < r)',
    )

  price = format_currency(result.price, symbol=currency)
  return Equation(
      model='growth',
      formula=formula,
      substituted=substituted,
      result=_result_text(result.price, currency),
      label=(f'{MODEL_NAMES["growth"]} Model equation: Present value at '
             f'time t equals dividend one of {d1} divided by required '
             f'return {inputs.required_return:.1f} percent minus growth '
             f'rate {inputs.constant_growth:.1f} percent, which equals '
             f'{price}'),
  )


def _changing_equation(
    inputs: ValuationInput,
    result: ValuationResult,
    currency: str,
) -> Equation:
  n = inputs.short_years
  r = format_percent(inputs.required_return)
  gs = format_percent(inputs.short_growth)
  gl = format_percent(inputs.long_growth)
  formula = ('PV_0 = Σ[t=1..n] D0(1+gs)^t / (1+r)^t'
             ' + Σ[t=n+1..∞] D_n+1(1+gl)^t / (1+r)^t')

  if not result.is_valid:
    return Equation(
        model='changing',
        formula=formula,
        substituted='P = Invalid',
        result='Invalid',
        label=(f'{MODEL_NAMES["changing"]} Model equation: Invalid result. '
               f'Long-term growth rate {inputs.long_growth:.1f} percent '
               f'must be less than required return '
               f'{inputs.required_return:.1f} percent'),
        error='Invalid (gl must be < r)',
    )

  d0 = format_currency(inputs.d0, symbol=currency)
  substituted = (f'PV_0 = Σ[t=1..{n}] {d0}(1+{gs})^t / (1+{r})^t'
                 f' + Σ[t={n + 1}..∞] D_{n + 1}(1+{gl})^t / (1+{r})^t')
  high = format_currency(result.pv_high_growth, symbol=currency)
  terminal = format_currency(result.pv_terminal, symbol=currency)
  price = format_currency(result.price, symbol=currency)
  return Equation(
      model='changing',
      formula=formula,
      substituted=substituted,
      result=_result_text(result.price, currency),
      label=(f'{MODEL_NAMES["changing"]} Model equation: Present value '
             f'equals {high} from high growth period plus {terminal} from '
             f'terminal value, which equals {price}'),
      breakdown=f'{high} (high growth) + {terminal} (terminal)',
  )


_FORMATTERS: Dict[str, Callable[[ValuationInput, ValuationResult, str],
                                Equation]] = {
    'constant': _constant_equation,
    'growth': _growth_equation,
    'changing': _changing_equation,
}


def render_equation(
    inputs: ValuationInput,
    result: ValuationResult,
    currency: str = 'USD',
) -> Equation:
  '''
  Format the equation for result.model.

  Raises:
    ValueError: If the model has no formatter
  '''
  if result.model not in _FORMATTERS:
    raise ValueError(f'No equation formatter for model: {result.model}')
  return _FORMATTERS[result.model](inputs, result, currency)


def render_equations(
    inputs: ValuationInput,
    results: Dict[str, ValuationResult],
    currency: str = 'USD',
) -> Dict[str, Equation]:
  '''Format the equations for every result, keyed by model.'''
  return {
      key: render_equation(inputs, result, currency)
      for key, result in results.items()
  }


def equation_text(equation: Equation) -> str:
  '''Multi-line plain-text block for terminals and logs.'''
  lines = [MODEL_NAMES[equation.model], f'  {equation.formula}',
           f'  {equation.substituted}']
  if equation.breakdown:
    lines.append(f'  {equation.breakdown}')
  lines.append(f'  {equation.error or equation.result}')
  return '\n'.join(lines)
