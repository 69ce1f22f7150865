'''
Number formatting for tables, charts and equations.

Currency amounts are shown as "USD 1,234.56". Negative amounts use a true
minus sign ("−USD 1.00") or, for schedule cells, parentheses.
'''

import math

MINUS = '−'


def format_currency(
    amount: float,
    parens: bool = False,
    symbol: str = 'USD',
) -> str:
  '''
  Format a currency amount with two decimals and thousands separators.

  Args:
    amount: Amount to format; nan formats as zero
    parens: Show negatives as "(USD 1.00)" instead of "−USD 1.00"
    symbol: Currency label placed before the number

  Returns:
    Formatted string
  '''
  if math.isnan(amount):
    return f'{symbol} 0.00'

  formatted = f'{abs(amount):,.2f}'
  if amount < 0 and parens:
    return f'({symbol} {formatted})'
  if amount < 0:
    return f'{MINUS}{symbol} {formatted}'
  return f'{symbol} {formatted}'


def format_price(price: float, symbol: str = 'USD') -> str:
  '''Format a model price, "Invalid" when it is not finite.'''
  if not math.isfinite(price):
    return 'Invalid'
  return format_currency(price, symbol=symbol)


def format_axis_tick(value: float) -> str:
  '''Bare whole number for chart axes, no currency label.'''
  formatted = f'{abs(value):,.0f}'
  return f'{MINUS}{formatted}' if value < 0 else formatted


def format_percent(value: float) -> str:
  '''Percent input with one decimal, e.g. 8 -> "8.0%".'''
  return f'{value:.1f}%'


def year_label(year: int, short: bool = False) -> str:
  '''Row/axis label for a schedule year; year 0 is the initial point.'''
  if year == 0:
    return 'Initial'
  return f'Yr {year}' if short else f'Year {year}'
