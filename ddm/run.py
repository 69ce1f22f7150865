'''
Calculator entrypoint.

This module provides the main entry point for one recalculation. It:
1. Builds a CalculatorConfig from a preset or JSON file plus CLI overrides
2. Evaluates the selected model(s)
3. Renders the schedule table, the equations and optionally the chart

Usage:
  from ddm.run import run_calculator
  from ddm.scenarios.config import CalculatorConfig

  results = run_calculator(CalculatorConfig.default())
  print(f"Growth: {results['growth'].price:.2f}")

CLI:
  python -m ddm.run --d0 2.00 --required-return 10 --constant-growth 4 \\
      --model growth --chart charts/growth.png --table out/growth.csv
'''

import argparse
from dataclasses import replace
import logging
from pathlib import Path
from typing import Dict, List, Optional

from ddm.domain.types import MODEL_KEYS
from ddm.domain.types import ValuationResult
from ddm.render.chart import plot_cash_flows
from ddm.render.chart import save_chart
from ddm.render.equations import equation_text
from ddm.render.equations import render_equations
from ddm.render.formatting import format_price
from ddm.render.styles import MODEL_NAMES
from ddm.render.table import build_schedule_table
from ddm.render.table import format_schedule_table
from ddm.scenarios.config import CalculatorConfig
from ddm.scenarios.registry import evaluate

logger = logging.getLogger(__name__)

# CLI flag destination -> CalculatorConfig field.
_OVERRIDES = (
    'd0',
    'required_return',
    'constant_growth',
    'short_growth',
    'long_growth',
    'short_years',
    'model',
    'horizon',
    'currency',
)


def run_calculator(config: CalculatorConfig) -> Dict[str, ValuationResult]:
  '''
  Run one recalculation.

  Args:
    config: Calculator configuration

  Returns:
    Dictionary of model key to ValuationResult for the selected model(s)

  Raises:
    ValueError: If the configuration cannot be displayed
  '''
  config.validate()
  inputs = config.to_inputs()
  logger.debug('Inputs: %s', inputs)

  results = evaluate(inputs, selected=config.model, horizon=config.horizon)
  for key, result in results.items():
    logger.debug('%s: price=%s', key, result.price)
  return results


def apply_overrides(
    config: CalculatorConfig,
    args: argparse.Namespace,
) -> CalculatorConfig:
  '''Replace config fields with the CLI flags that were given.'''
  changes = {
      name: getattr(args, name)
      for name in _OVERRIDES
      if getattr(args, name, None) is not None
  }
  if not changes:
    return config
  return replace(config, **changes)


def build_parser() -> argparse.ArgumentParser:
  parser = argparse.ArgumentParser(
      description='Dividend discount model calculator')
  parser.add_argument('--preset',
                      type=str,
                      default='default',
                      choices=['default', 'two_stage'],
                      help='Configuration preset')
  parser.add_argument('--config',
                      type=Path,
                      help='JSON calculator config (overrides --preset)')
  parser.add_argument('--d0', type=float, help='Base dividend')
  parser.add_argument('--required-return',
                      type=float,
                      help='Required return in percent')
  parser.add_argument('--constant-growth',
                      type=float,
                      help='Constant growth rate in percent')
  parser.add_argument('--short-growth',
                      type=float,
                      help='High-growth rate in percent')
  parser.add_argument('--long-growth',
                      type=float,
                      help='Long-term growth rate in percent')
  parser.add_argument('--short-years',
                      type=int,
                      help='Length of the high-growth phase in years')
  parser.add_argument('--model',
                      type=str,
                      choices=['all', *MODEL_KEYS],
                      help='Model to show')
  parser.add_argument('--horizon',
                      type=int,
                      help='Years shown in the cash-flow schedule')
  parser.add_argument('--currency', type=str, help='Currency label')
  parser.add_argument('--chart', type=Path, help='Output PNG path (optional)')
  parser.add_argument('--table', type=Path, help='Output CSV path (optional)')
  parser.add_argument('--verbose',
                      '-v',
                      action='store_true',
                      help='Verbose output')
  return parser


def main(argv: Optional[List[str]] = None) -> None:
  '''CLI entrypoint.'''
  parser = build_parser()
  args = parser.parse_args(argv)

  logging.basicConfig(
      level=logging.DEBUG if args.verbose else logging.INFO,
      format='%(message)s',
  )

  if args.config:
    config = CalculatorConfig.from_file(args.config)
  else:
    config = CalculatorConfig.preset(args.preset)
  config = apply_overrides(config, args)

  try:
    results = run_calculator(config)
  except ValueError as e:
    parser.error(str(e))

  inputs = config.to_inputs()

  separator = '=' * 70
  logger.info('\n%s', separator)
  logger.info('Dividend Discount Valuation - %s', config.name)
  logger.info(separator)

  logger.info('\nInputs:')
  logger.info('  D0: %.2f', inputs.d0)
  logger.info('  Required Return (r): %.2f%%', inputs.required_return)
  logger.info('  Constant Growth (g): %.2f%%', inputs.constant_growth)
  logger.info('  High Growth (gs): %.2f%% for %d years', inputs.short_growth,
              inputs.short_years)
  logger.info('  Long-term Growth (gl): %.2f%%', inputs.long_growth)

  logger.info('\nPrices:')
  for key, result in results.items():
    logger.info('  %s: %s', MODEL_NAMES[key],
                format_price(result.price, symbol=config.currency))

  logger.info('\nEquations:')
  for equation in render_equations(inputs, results, config.currency).values():
    logger.info('%s', equation_text(equation))

  table = build_schedule_table(results, config.model)
  logger.info('\nCash Flows:\n%s',
              format_schedule_table(table, config.currency).to_string())

  if args.table:
    args.table.parent.mkdir(parents=True, exist_ok=True)
    table.to_csv(args.table)
    logger.info('\nSaved table: %s', args.table)

  if args.chart:
    fig = plot_cash_flows(results, config.model, currency=config.currency)
    save_chart(fig, args.chart)

  logger.info('%s\n', separator)


if __name__ == '__main__':
  main()
