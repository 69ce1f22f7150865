'''
Cash-flow schedule table.

Builds a pandas DataFrame with one row per schedule year ("Initial",
"Year 1", ...) and one column per shown model, followed by two footer rows:
the total of positive dividends received and the model price.

Usage:
  from ddm.render.table import render_table
  from ddm.scenarios.registry import evaluate

  table = render_table(evaluate(inputs), selected='all')
  print(table.to_string())
'''

from typing import Dict, List

import pandas as pd

from ddm.domain.types import ValuationResult
from ddm.render.formatting import format_currency
from ddm.render.formatting import format_price
from ddm.render.formatting import year_label
from ddm.render.styles import MODEL_NAMES
from ddm.render.styles import PRICE_NOTATION
from ddm.scenarios.registry import resolve_models

TOTAL_ROW = 'Total Received'
FOOTER_ROWS = 2


def shown_models(
    results: Dict[str, ValuationResult],
    selected: str = 'all',
) -> List[str]:
  '''Model keys to display, checked against the available results.'''
  models = resolve_models(selected)
  missing = [m for m in models if m not in results]
  if missing:
    raise ValueError(f'No result for model(s): {", ".join(missing)}')
  return models


def schedule_frame(
    results: Dict[str, ValuationResult],
    models: List[str],
) -> pd.DataFrame:
  '''
  Align the models' cash-flow schedules on a common year index.

  Rows cover every year present in any shown schedule; a model with no
  entry for a year reads 0.0 there.

  Returns:
    DataFrame indexed by year with one column per model key
  '''
  years = sorted(set().union(*(results[m].years for m in models)))
  data = {}
  for m in models:
    dividends = results[m].dividends
    data[m] = [dividends.get(y, 0.0) for y in years]
  return pd.DataFrame(data, index=pd.Index(years, name='year'))


def price_label(models: List[str]) -> str:
  '''Footer label carrying the price notation of each shown model.'''
  notation = ' / '.join(PRICE_NOTATION[m] for m in models)
  return f'Stock Price ({notation})'


def build_schedule_table(
    results: Dict[str, ValuationResult],
    selected: str = 'all',
) -> pd.DataFrame:
  '''
  Numeric schedule table with total and price footer rows.

  Args:
    results: Model key to ValuationResult
    selected: A model key or 'all'

  Returns:
    DataFrame of floats; columns are model display names, the price row
    holds nan for invalid models
  '''
  models = shown_models(results, selected)
  frame = schedule_frame(results, models)
  rows = frame.rename(index=year_label)

  footer = pd.DataFrame(
      [
          {m: results[m].total_received() for m in models},
          {m: results[m].price for m in models},
      ],
      index=[TOTAL_ROW, price_label(models)],
  )

  table = pd.concat([rows, footer])
  table.index.name = 'Year'
  table.columns = [MODEL_NAMES[m] for m in models]
  return table


def format_schedule_table(
    table: pd.DataFrame,
    currency: str = 'USD',
) -> pd.DataFrame:
  '''
  Format a numeric schedule table for display.

  Schedule cells show negatives in parentheses; the price row shows
  "Invalid" for models whose price is not finite.
  '''
  n_years = len(table) - FOOTER_ROWS
  formatted = {}
  for column in table.columns:
    values = table[column].tolist()
    cells = [
        format_currency(v, parens=True, symbol=currency)
        for v in values[:n_years]
    ]
    cells.append(format_currency(values[n_years], symbol=currency))
    cells.append(format_price(values[n_years + 1], symbol=currency))
    formatted[column] = cells

  result = pd.DataFrame(formatted, index=table.index)
  return result


def render_table(
    results: Dict[str, ValuationResult],
    selected: str = 'all',
    currency: str = 'USD',
) -> pd.DataFrame:
  '''Build and format the schedule table in one step.'''
  return format_schedule_table(build_schedule_table(results, selected),
                               currency=currency)
