import matplotlib.pyplot as plt
from matplotlib.patches import Rectangle
import pytest

from ddm.engine.dividend import value_all
from ddm.render.chart import announce
from ddm.render.chart import ChartView
from ddm.render.chart import plot_cash_flows
from ddm.render.chart import save_chart
from ddm.render.chart import tooltip_lines


@pytest.fixture
def results(growth_inputs):
  return value_all(growth_inputs, horizon=4)


class TestChartView:
  """Tests for ChartView navigation."""

  def test_for_results(self, results):
    """One point per schedule year; changing model reaches year 4."""
    view = ChartView.for_results(results)

    assert view.n_points == 5
    assert view.focus_index == 0
    assert not view.keyboard_mode

  def test_forward_and_back(self):
    view = ChartView(n_points=4)

    view = view.navigate('ArrowRight').navigate('ArrowDown')
    assert view.focus_index == 2
    view = view.navigate('ArrowLeft')
    assert view.focus_index == 1
    view = view.navigate('ArrowUp')
    assert view.focus_index == 0

  def test_clamped_at_edges(self):
    view = ChartView(n_points=3)

    assert view.navigate('ArrowLeft').focus_index == 0
    assert view.navigate('End').navigate('ArrowRight').focus_index == 2

  def test_home_and_end(self):
    view = ChartView(n_points=6, focus_index=3)

    assert view.navigate('Home').focus_index == 0
    assert view.navigate('End').focus_index == 5

  def test_key_press_enables_keyboard_mode(self):
    view = ChartView(n_points=3).navigate('Tab')

    assert view.keyboard_mode
    assert view.focus_index == 0

  def test_mouse_move_disables_keyboard_mode(self):
    view = ChartView(n_points=3).focus().mouse_move()

    assert not view.keyboard_mode

  def test_navigate_returns_new_view(self):
    """Views are immutable; the caller keeps the returned state."""
    view = ChartView(n_points=3)
    moved = view.navigate('End')

    assert view.focus_index == 0
    assert moved.focus_index == 2

  def test_empty_chart(self):
    assert ChartView(n_points=0).navigate('End').focus_index == 0


class TestAnnounce:
  """Tests for screen-reader announcements."""

  def test_initial_all_models(self, results):
    text = announce(ChartView.for_results(results), results)

    assert text == ('Initial investment. Constant: USD 2.00. '
                    'Growth: USD 2.00. Two-stage: USD 2.00.')

  def test_single_model(self, results):
    view = ChartView.for_results(results, 'growth').navigate('ArrowRight')

    assert announce(view, results, 'growth') == 'Year 1. USD 2.08'

  def test_tooltip_lines(self, results):
    view = ChartView.for_results(results).navigate('ArrowRight')
    lines = tooltip_lines(view, results)

    assert lines[0] == 'Year 1'
    assert lines[1] == 'Constant Dividend: USD 0.00'
    assert lines[3] == 'Changing Growth: USD 2.40'


class TestPlotCashFlows:
  """Tests for plot_cash_flows."""

  def test_all_models(self, results):
    """One bar container per model and a legend."""
    fig = plot_cash_flows(results)
    ax = fig.axes[0]

    assert len(ax.containers) == 3
    assert all(len(c) == 5 for c in ax.containers)
    assert ax.get_legend() is not None
    assert len(ax.texts) == 0
    plt.close(fig)

  def test_single_model_value_labels(self, results):
    """Single model view labels each bar and has no legend."""
    fig = plot_cash_flows(results, 'growth')
    ax = fig.axes[0]

    assert ax.get_legend() is None
    assert len(ax.texts) == 5
    assert ax.texts[0].get_text() == 'USD 2.00'
    plt.close(fig)

  def test_axis_labels(self, results):
    fig = plot_cash_flows(results, 'growth', currency='EUR')
    ax = fig.axes[0]

    assert ax.get_xlabel() == 'Time Period'
    assert ax.get_ylabel() == 'Cash Flows (EUR)'
    assert [t.get_text() for t in ax.get_xticklabels()
           ] == ['Initial', 'Yr 1', 'Yr 2', 'Yr 3', 'Yr 4']
    plt.close(fig)

  def test_focus_box_in_keyboard_mode(self, results):
    view = ChartView.for_results(results).navigate('ArrowRight')
    fig = plot_cash_flows(results, view=view)
    ax = fig.axes[0]

    boxes = [p for p in ax.patches if p.get_linestyle() == '--']
    assert len(boxes) == 1
    assert isinstance(boxes[0], Rectangle)
    plt.close(fig)

  def test_no_focus_box_without_keyboard(self, results):
    view = ChartView.for_results(results)
    fig = plot_cash_flows(results, view=view)

    assert not [p for p in fig.axes[0].patches if p.get_linestyle() == '--']
    plt.close(fig)

  def test_existing_axes(self, results):
    fig, ax = plt.subplots()
    returned = plot_cash_flows(results, 'constant', ax=ax)

    assert returned is fig
    plt.close(fig)


def test_save_chart(tmp_path, results):
  output = tmp_path / 'charts' / 'ddm.png'
  save_chart(plot_cash_flows(results), output)

  assert output.exists()
  assert output.stat().st_size > 0
