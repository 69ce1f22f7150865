"""
Sensitivity analysis for dividend discount valuation.

This module provides tools to generate 2D sensitivity tables that show
how the model price varies across required returns and growth rates.

CLI Usage:
  python -m ddm.analysis.sensitivity \\
      --d0 2.00 --model growth \\
      --required-returns 8,10,12 \\
      --growth-rates 2,3,4,5
"""

import argparse
from dataclasses import replace
import logging
from pathlib import Path

import pandas as pd

from ddm.domain.types import ValuationInput
from ddm.scenarios.registry import MODEL_REGISTRY

logger = logging.getLogger(__name__)

# Input field varied along the growth axis for each model.
GROWTH_FIELDS = {
    'growth': 'constant_growth',
    'changing': 'long_growth',
}


class SensitivityTableBuilder:
  """
  Build 2D sensitivity tables for model prices.

  Varies the required return and the model's perpetual growth rate while
  keeping the other inputs fixed. For the changing growth model the
  long-term growth rate is varied.
  """

  def __init__(
      self,
      inputs: ValuationInput,
      model: str = 'growth',
  ):
    """
    Initialize sensitivity table builder.

    Args:
        inputs: Base inputs; required return and growth are overridden
        model: 'growth' or 'changing'
    """
    if model not in GROWTH_FIELDS:
      raise ValueError(f'Sensitivity needs a growth model, got {model}. '
                       f'Available: {", ".join(GROWTH_FIELDS)}')
    self.inputs = inputs
    self.model = model
    self.growth_field = GROWTH_FIELDS[model]

    logger.info('Initialized SensitivityTableBuilder')
    logger.info('  Model: %s', model)
    logger.info('  D0: %.2f', inputs.d0)
    if model == 'changing':
      logger.info('  High growth: %.2f%% for %d years', inputs.short_growth,
                  inputs.short_years)

  def build(
      self,
      required_returns: list[float],
      growth_rates: list[float],
  ) -> pd.DataFrame:
    """
    Build 2D sensitivity table.

    Args:
        required_returns: Required returns in percent (e.g., [8, 10, 12])
        growth_rates: Growth rates in percent (e.g., [2, 3, 4])

    Returns:
        DataFrame with required returns as index, growth rates as columns,
        and prices as cell values (nan where growth >= return)
    """
    if not required_returns:
      raise ValueError('required_returns cannot be empty')
    if not growth_rates:
      raise ValueError('growth_rates cannot be empty')

    logger.info('Building sensitivity table: %d x %d', len(required_returns),
                len(growth_rates))

    value_fn = MODEL_REGISTRY[self.model]
    data_rows = []

    for r in required_returns:
      row_data = []
      for g in growth_rates:
        inputs = replace(self.inputs,
                         required_return=r,
                         **{self.growth_field: g})
        row_data.append(value_fn(inputs, 0).price)
      data_rows.append(row_data)

    r_labels = [f'{r:.1f}%' for r in required_returns]
    g_labels = [f'{g:.1f}%' for g in growth_rates]

    df = pd.DataFrame(data_rows, index=r_labels, columns=g_labels)
    df.index.name = 'Required Return'
    df.columns.name = ('Growth' if self.model == 'growth' else
                       'Long-term Growth')

    logger.info('Sensitivity table built successfully')
    return df


def _parse_float_list(s: str) -> list[float]:
  """Parse comma-separated float list."""
  return [float(x.strip()) for x in s.split(',')]


def _frange(start: float, stop: float, step: float) -> list[float]:
  """
  Inclusive float range with rounding.

  Args:
      start: Start value
      stop: Stop value (inclusive)
      step: Step size

  Returns:
      List of floats from start to stop (inclusive)
  """
  if step <= 0:
    raise ValueError('step must be > 0')
  n = int(round((stop - start) / step))
  if n < 0:
    return []
  return [round(start + k * step, 12) for k in range(n + 1)]


def _resolve_axis(
    values: str | None,
    low: float | None,
    high: float | None,
    step: float,
    name: str,
) -> list[float]:
  """Pick explicit list or min/max/step range for one axis."""
  if values:
    return _parse_float_list(values)
  if low is not None and high is not None:
    return _frange(low, high, step)
  raise ValueError(f'Specify --{name}s or both --{name}-min and --{name}-max')


def main() -> None:
  """CLI entrypoint for sensitivity analysis."""
  parser = argparse.ArgumentParser(
      description='Dividend Discount Sensitivity Analysis',
      formatter_class=argparse.RawDescriptionHelpFormatter,
      epilog="""
Examples:
  # Gordon growth with explicit rates
  python -m ddm.analysis.sensitivity \\
      --d0 2.00 --required-returns 8,10,12 --growth-rates 2,3,4,5

  # Two-stage model using range specification
  python -m ddm.analysis.sensitivity \\
      --model changing --d0 2.00 --short-growth 20 --short-years 3 \\
      --required-return-min 8 --required-return-max 14 \\
      --growth-rate-min 1 --growth-rate-max 5 --growth-rate-step 0.5
      """)

  parser.add_argument('--d0', type=float, required=True, help='Base dividend')
  parser.add_argument('--model',
                      type=str,
                      default='growth',
                      choices=sorted(GROWTH_FIELDS),
                      help='Model to analyse (default: growth)')
  parser.add_argument('--short-growth',
                      type=float,
                      default=0.0,
                      help='High-growth rate in percent (changing model)')
  parser.add_argument('--short-years',
                      type=int,
                      default=0,
                      help='High-growth years (changing model)')

  # Option 1: Explicit lists
  parser.add_argument('--required-returns',
                      type=str,
                      help='Comma-separated required returns (e.g., 8,10)')
  parser.add_argument('--growth-rates',
                      type=str,
                      help='Comma-separated growth rates (e.g., 2,3,4)')

  # Option 2: Range specification
  parser.add_argument('--required-return-min',
                      type=float,
                      help='Minimum required return')
  parser.add_argument('--required-return-max',
                      type=float,
                      help='Maximum required return')
  parser.add_argument('--required-return-step',
                      type=float,
                      default=1.0,
                      help='Required return step (default: 1.0)')
  parser.add_argument('--growth-rate-min',
                      type=float,
                      help='Minimum growth rate')
  parser.add_argument('--growth-rate-max',
                      type=float,
                      help='Maximum growth rate')
  parser.add_argument('--growth-rate-step',
                      type=float,
                      default=1.0,
                      help='Growth rate step (default: 1.0)')

  parser.add_argument('--output', type=Path, help='Output CSV path (optional)')
  parser.add_argument('--verbose',
                      '-v',
                      action='store_true',
                      help='Verbose output')

  args = parser.parse_args()

  logging.basicConfig(
      level=logging.DEBUG if args.verbose else logging.INFO,
      format='%(asctime)s [%(levelname)s] %(message)s',
      datefmt='%Y-%m-%d %H:%M:%S',
  )

  try:
    required_returns = _resolve_axis(args.required_returns,
                                     args.required_return_min,
                                     args.required_return_max,
                                     args.required_return_step,
                                     'required-return')
    growth_rates = _resolve_axis(args.growth_rates, args.growth_rate_min,
                                 args.growth_rate_max, args.growth_rate_step,
                                 'growth-rate')
  except ValueError as e:
    parser.error(str(e))

  inputs = ValuationInput(
      d0=args.d0,
      required_return=required_returns[0],
      short_growth=args.short_growth,
      short_years=args.short_years,
  )

  builder = SensitivityTableBuilder(inputs, model=args.model)
  df = builder.build(required_returns, growth_rates)

  logger.info('\n%s', df.to_string(float_format=lambda v: f'{v:,.2f}'))

  if args.output:
    args.output.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(args.output)
    logger.info('Saved to: %s', args.output)


if __name__ == '__main__':
  main()
