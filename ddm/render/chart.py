'''
Dividend cash-flow bar chart.

Draws the models' schedules as grouped bars with matplotlib. Keyboard
navigation over the bars is modelled by ChartView, an immutable view-state
object owned by the caller: every key press returns a new ChartView that is
passed back into plot_cash_flows() and announce().

Usage:
  view = ChartView.for_results(results).navigate('End')
  fig = plot_cash_flows(results, view=view)
  save_chart(fig, Path('charts/ddm.png'))
  print(announce(view, results))
'''

from dataclasses import dataclass
from dataclasses import replace
import logging
from pathlib import Path
from typing import Dict, List, Optional

import matplotlib.pyplot as plt
from matplotlib.axes import Axes
from matplotlib.figure import Figure
from matplotlib.patches import Rectangle
from matplotlib.ticker import FuncFormatter
import pandas as pd

from ddm.domain.types import ValuationResult
from ddm.render.formatting import format_axis_tick
from ddm.render.formatting import format_currency
from ddm.render.formatting import year_label
from ddm.render.styles import DARK_TEXT
from ddm.render.styles import LABEL_TEXT
from ddm.render.styles import MODEL_COLORS
from ddm.render.styles import MODEL_NAMES
from ddm.render.styles import MODEL_SHORT_NAMES
from ddm.render.table import schedule_frame
from ddm.render.table import shown_models

logger = logging.getLogger(__name__)

FORWARD_KEYS = ('ArrowRight', 'ArrowDown')
BACKWARD_KEYS = ('ArrowLeft', 'ArrowUp')
GROUP_WIDTH = 0.8


@dataclass(frozen=True)
class ChartView:
  '''
  Keyboard focus state for one chart render.

  Attributes:
    n_points: Number of bar groups (schedule years)
    focus_index: Index of the focused bar group
    keyboard_mode: True once the user navigates with the keyboard; mouse
      movement switches it off again
  '''
  n_points: int
  focus_index: int = 0
  keyboard_mode: bool = False

  @classmethod
  def for_results(
      cls,
      results: Dict[str, ValuationResult],
      selected: str = 'all',
  ) -> 'ChartView':
    '''Fresh view for a new render; focus starts on the first group.'''
    models = shown_models(results, selected)
    return cls(n_points=len(schedule_frame(results, models)))

  def navigate(self, key: str) -> 'ChartView':
    '''
    Apply a key press.

    Right/Down and Left/Up step by one group, Home and End jump to the
    first and last group. Any key press enables keyboard mode.
    '''
    max_index = max(self.n_points - 1, 0)
    if key in FORWARD_KEYS:
      index = min(self.focus_index + 1, max_index)
    elif key in BACKWARD_KEYS:
      index = max(self.focus_index - 1, 0)
    elif key == 'Home':
      index = 0
    elif key == 'End':
      index = max_index
    else:
      index = self.focus_index
    return replace(self, focus_index=index, keyboard_mode=True)

  def focus(self) -> 'ChartView':
    return replace(self, keyboard_mode=True)

  def mouse_move(self) -> 'ChartView':
    return replace(self, keyboard_mode=False)


def _focused_year(
    view: ChartView,
    frame: pd.DataFrame,
) -> int:
  return int(frame.index[min(view.focus_index, len(frame) - 1)])


def announce(
    view: ChartView,
    results: Dict[str, ValuationResult],
    selected: str = 'all',
    currency: str = 'USD',
) -> str:
  '''
  Screen-reader text for the focused bar group.

  Example: "Year 2. Constant: USD 0.00. Growth: USD 2.16. Two-stage: ..."
  '''
  models = shown_models(results, selected)
  frame = schedule_frame(results, models)
  year = _focused_year(view, frame)
  label = 'Initial investment' if year == 0 else f'Year {year}'

  if len(models) == 1:
    amount = format_currency(abs(frame.loc[year, models[0]]), symbol=currency)
    return f'{label}. {amount}'

  parts = [f'{label}.']
  for m in models:
    amount = format_currency(abs(frame.loc[year, m]), symbol=currency)
    parts.append(f'{MODEL_SHORT_NAMES[m]}: {amount}.')
  return ' '.join(parts)


def tooltip_lines(
    view: ChartView,
    results: Dict[str, ValuationResult],
    selected: str = 'all',
    currency: str = 'USD',
) -> List[str]:
  '''Title and one line per model for the focused bar group.'''
  models = shown_models(results, selected)
  frame = schedule_frame(results, models)
  year = _focused_year(view, frame)

  lines = ['Initial Investment' if year == 0 else f'Year {year}']
  for m in models:
    amount = format_currency(abs(frame.loc[year, m]), symbol=currency)
    lines.append(f'{MODEL_NAMES[m]}: {amount}')
  return lines


def _draw_value_labels(
    ax: Axes,
    positions: List[float],
    values: List[float],
    currency: str,
) -> None:
  '''Label every bar at one common height above the tallest bar.'''
  ymin, ymax = ax.get_ylim()
  span = ymax - ymin
  top = max(max(values), 0.0)

  for x, value in zip(positions, values):
    label = format_currency(value, parens=True, symbol=currency)
    ax.text(x,
            top + span * 0.01,
            label,
            ha='center',
            va='bottom',
            fontsize=9,
            fontweight='bold',
            color=LABEL_TEXT)

  ax.set_ylim(ymin, ymax + span * 0.08)


def _draw_focus(
    ax: Axes,
    view: ChartView,
    frame: pd.DataFrame,
) -> None:
  '''Dashed box around the focused bar group.'''
  index = min(view.focus_index, len(frame) - 1)
  values = frame.iloc[index].tolist()
  low = min(min(values), 0.0)
  high = max(max(values), 0.0)
  ymin, ymax = ax.get_ylim()
  pad = (ymax - ymin) * 0.01
  x = index - GROUP_WIDTH / 2 - 0.05

  ax.add_patch(
      Rectangle((x, low - pad),
                GROUP_WIDTH + 0.1,
                high - low + 2 * pad,
                fill=True,
                facecolor=DARK_TEXT,
                alpha=0.1))
  ax.add_patch(
      Rectangle((x, low - pad),
                GROUP_WIDTH + 0.1,
                high - low + 2 * pad,
                fill=False,
                edgecolor=DARK_TEXT,
                linestyle='--',
                linewidth=2))


def plot_cash_flows(
    results: Dict[str, ValuationResult],
    selected: str = 'all',
    view: Optional[ChartView] = None,
    currency: str = 'USD',
    ax: Optional[Axes] = None,
) -> Figure:
  '''
  Draw the schedules of the shown models as grouped bars.

  Args:
    results: Model key to ValuationResult
    selected: A model key or 'all'
    view: Keyboard view state; the focus box is drawn in keyboard mode
    currency: Currency label for the axis and bar labels
    ax: Axes to draw on; a new figure is created when omitted

  Returns:
    The matplotlib Figure holding the chart
  '''
  models = shown_models(results, selected)
  frame = schedule_frame(results, models)

  if ax is None:
    fig, ax = plt.subplots(figsize=(12, 6))
  else:
    fig = ax.figure

  positions = list(range(len(frame)))
  width = GROUP_WIDTH / len(models)

  for i, m in enumerate(models):
    offsets = [p - GROUP_WIDTH / 2 + width * (i + 0.5) for p in positions]
    ax.bar(offsets,
           frame[m].tolist(),
           width=width,
           color=MODEL_COLORS[m],
           label=MODEL_NAMES[m])

  ax.set_xticks(positions)
  ax.set_xticklabels([year_label(int(y), short=True) for y in frame.index],
                     fontsize=11,
                     fontweight='bold')
  ax.set_xlabel('Time Period', fontsize=12, fontweight='bold')
  ax.set_ylabel(f'Cash Flows ({currency})', fontsize=12, fontweight='bold')
  ax.yaxis.set_major_formatter(FuncFormatter(lambda v, _: format_axis_tick(v)))

  if len(models) > 1:
    ax.legend(loc='upper left', fontsize=11, framealpha=0.9)
  else:
    _draw_value_labels(ax, positions, frame[models[0]].tolist(), currency)

  if view is not None and view.keyboard_mode:
    _draw_focus(ax, view, frame)

  fig.tight_layout()
  return fig


def save_chart(fig: Figure, output_path: Path, dpi: int = 150) -> None:
  '''Write the chart to disk and release the figure.'''
  output_path.parent.mkdir(parents=True, exist_ok=True)
  fig.savefig(output_path, dpi=dpi, bbox_inches='tight')
  plt.close(fig)
  logger.info('Saved chart: %s', output_path)
