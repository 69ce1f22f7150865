import math

import pytest

from ddm.domain.types import ValuationInput
from ddm.engine.dividend import changing_growth
from ddm.engine.dividend import compute_pv_high_growth
from ddm.engine.dividend import compute_terminal_value
from ddm.engine.dividend import constant_dividend
from ddm.engine.dividend import constant_growth
from ddm.engine.dividend import DEFAULT_HORIZON
from ddm.engine.dividend import growth_schedule
from ddm.engine.dividend import two_stage_schedule
from ddm.engine.dividend import value_all


class TestComputePVHighGrowth:
  """Tests for compute_pv_high_growth function."""

  def test_normal_case(self):
    """Three years of 20% growth discounted at 12%.

    Manual calculation:
    Year 1: D=2.400, PV=2.400/1.120000=2.142857
    Year 2: D=2.880, PV=2.880/1.254400=2.295918
    Year 3: D=3.456, PV=3.456/1.404928=2.459913
    Total PV: 6.898688
    """
    pv, final_dividend = compute_pv_high_growth(
        d0=2.0,
        g_short=0.20,
        discount_rate=0.12,
        n_years=3,
    )

    assert pv == pytest.approx(6.898688, abs=1e-6)
    assert final_dividend == pytest.approx(3.456, rel=1e-12)

  def test_zero_years(self):
    """No high-growth phase contributes nothing."""
    pv, final_dividend = compute_pv_high_growth(
        d0=2.0,
        g_short=0.20,
        discount_rate=0.12,
        n_years=0,
    )

    assert pv == 0.0
    assert final_dividend == 2.0

  def test_growth_equals_discount(self):
    """When g == r every discounted dividend equals D0."""
    pv, _ = compute_pv_high_growth(
        d0=1.5,
        g_short=0.10,
        discount_rate=0.10,
        n_years=4,
    )

    assert pv == pytest.approx(6.0, rel=1e-12)


class TestComputeTerminalValue:
  """Tests for compute_terminal_value function."""

  def test_normal_case(self):
    """Standard Gordon growth terminal value.

    Manual calculation:
    TV = (3.456 * 1.04) / (0.12 - 0.04) = 3.59424 / 0.08 = 44.928
    PV = 44.928 / 1.12^3 = 44.928 / 1.404928 = 31.978863
    """
    pv_tv = compute_terminal_value(
        final_dividend=3.456,
        g_terminal=0.04,
        discount_rate=0.12,
        final_year=3,
    )

    assert pv_tv == pytest.approx(31.978863, abs=1e-6)

  def test_zero_final_year(self):
    """No discounting when final_year is 0."""
    pv_tv = compute_terminal_value(
        final_dividend=2.0,
        g_terminal=0.04,
        discount_rate=0.10,
        final_year=0,
    )

    assert pv_tv == pytest.approx(2.08 / 0.06, rel=1e-12)

  def test_growth_equals_discount(self):
    """g_terminal == r is undefined."""
    pv_tv = compute_terminal_value(
        final_dividend=2.0,
        g_terminal=0.08,
        discount_rate=0.08,
        final_year=3,
    )

    assert math.isnan(pv_tv)

  def test_growth_above_discount(self):
    """g_terminal > r is undefined, not a negative value."""
    pv_tv = compute_terminal_value(
        final_dividend=2.0,
        g_terminal=0.09,
        discount_rate=0.08,
        final_year=3,
    )

    assert math.isnan(pv_tv)


class TestSchedules:
  """Tests for the display cash-flow schedules."""

  def test_growth_schedule(self):
    """D0(1+g)^t for t = 0..horizon."""
    flows = growth_schedule(d0=2.0, growth=0.04, horizon=3)

    assert [cf.year for cf in flows] == [0, 1, 2, 3]
    assert flows[0].dividend == 2.0
    assert flows[1].dividend == pytest.approx(2.08, rel=1e-12)
    assert flows[3].dividend == pytest.approx(2.0 * 1.04**3, rel=1e-12)

  def test_growth_schedule_zero_horizon(self):
    """Zero horizon keeps only the reference year."""
    flows = growth_schedule(d0=2.0, growth=0.04, horizon=0)

    assert len(flows) == 1
    assert flows[0].year == 0

  def test_two_stage_switches_rate_after_n(self):
    """Short growth through year n, long growth afterwards."""
    flows = two_stage_schedule(d0=2.0,
                               g_short=0.20,
                               g_long=0.04,
                               n_years=3,
                               horizon=5)

    assert [cf.year for cf in flows] == [0, 1, 2, 3, 4, 5]
    assert flows[3].dividend == pytest.approx(3.456, rel=1e-12)
    assert flows[4].dividend == pytest.approx(3.456 * 1.04, rel=1e-12)
    assert flows[5].dividend == pytest.approx(3.456 * 1.04**2, rel=1e-12)

  def test_two_stage_extends_past_short_horizon(self):
    """High-growth phase longer than horizon still shows year n + 1."""
    flows = two_stage_schedule(d0=1.0,
                               g_short=0.10,
                               g_long=0.02,
                               n_years=12,
                               horizon=10)

    assert flows[-1].year == 13
    assert flows[-1].dividend == pytest.approx(1.1**12 * 1.02, rel=1e-12)

  def test_growth_schedule_overflow_saturates(self):
    """Dividends too large for a float become inf instead of raising."""
    flows = growth_schedule(d0=2.0, growth=10.0, horizon=400)

    assert len(flows) == 401
    assert math.isfinite(flows[100].dividend)
    assert flows[-1].dividend == math.inf

  def test_growth_schedule_overflow_keeps_sign(self):
    """A negative growth factor overflows to -inf on odd years."""
    flows = growth_schedule(d0=1.0, growth=-12.0, horizon=301)

    assert flows[-1].dividend == -math.inf
    assert flows[-2].dividend == math.inf

  def test_two_stage_overflow_saturates(self):
    flows = two_stage_schedule(d0=2.0,
                               g_short=10.0,
                               g_long=0.04,
                               n_years=300,
                               horizon=10)

    assert flows[-1].year == 301
    assert flows[-1].dividend == math.inf


class TestConstantDividend:
  """Tests for the constant dividend model."""

  def test_price(self, growth_inputs):
    """P = 2.00 / 0.10 = 20.00."""
    result = constant_dividend(growth_inputs)

    assert result.model == 'constant'
    assert result.price == pytest.approx(20.0, rel=1e-12)
    assert result.is_valid

  def test_single_reference_cash_flow(self, growth_inputs):
    """Schedule is a single year-0 entry with D0."""
    result = constant_dividend(growth_inputs)

    assert len(result.cash_flows) == 1
    assert result.cash_flows[0].year == 0
    assert result.cash_flows[0].dividend == 2.0

  def test_zero_required_return_invalid(self):
    """r = 0 yields nan rather than raising."""
    result = constant_dividend(ValuationInput(d0=2.0, required_return=0.0))

    assert math.isnan(result.price)
    assert not result.is_valid

  def test_negative_required_return_propagates(self):
    """Negative r is not rejected; arithmetic propagates."""
    result = constant_dividend(ValuationInput(d0=2.0, required_return=-5.0))

    assert result.price == pytest.approx(-40.0, rel=1e-12)
    assert result.is_valid


class TestConstantGrowth:
  """Tests for the Gordon growth model."""

  def test_textbook_scenario(self, growth_inputs):
    """D0=2.00, r=10%, g=4%: D1=2.08, P=2.08/0.06=34.67."""
    result = constant_growth(growth_inputs)

    assert result.price == pytest.approx(34.67, abs=0.01)
    assert result.cash_flows[1].dividend == pytest.approx(2.08, rel=1e-12)

  @pytest.mark.parametrize('d0,r,g', [
      (2.0, 10.0, 4.0),
      (1.25, 8.0, 2.5),
      (3.0, 12.0, -2.0),
      (0.0, 9.0, 3.0),
  ])
  def test_matches_closed_form(self, d0, r, g):
    """Price equals D0(1+g)/(r-g) for g < r."""
    inputs = ValuationInput(d0=d0, required_return=r, constant_growth=g)
    result = constant_growth(inputs)

    expected = d0 * (1 + g / 100) / (r / 100 - g / 100)
    assert result.price == pytest.approx(expected, rel=1e-9)

  def test_growth_equals_required_return(self, invalid_inputs):
    """g == r divides by zero, so the result is invalid."""
    result = constant_growth(invalid_inputs)

    assert math.isnan(result.price)
    assert not result.is_valid

  def test_growth_above_required_return(self):
    """g > r is invalid, not a negative price."""
    inputs = ValuationInput(d0=2.0, required_return=6.0, constant_growth=9.0)
    result = constant_growth(inputs)

    assert not result.is_valid

  def test_schedule_still_produced_when_invalid(self, invalid_inputs):
    """Display schedule does not depend on validity."""
    result = constant_growth(invalid_inputs)

    assert len(result.cash_flows) == DEFAULT_HORIZON + 1

  def test_custom_horizon(self, growth_inputs):
    result = constant_growth(growth_inputs, horizon=5)

    assert result.years == (0, 1, 2, 3, 4, 5)

  def test_overflowing_schedule_does_not_raise(self):
    inputs = ValuationInput(d0=2.0, required_return=10.0, constant_growth=1000.0)
    result = constant_growth(inputs, horizon=400)

    assert math.isnan(result.price)
    assert result.cash_flows[-1].dividend == math.inf


class TestChangingGrowth:
  """Tests for the two-stage growth model."""

  def test_two_stage_scenario(self, two_stage_inputs):
    """D0=2.00, r=12%, 20% for 3 years then 4%.

    PV high growth: 6.898688
    PV terminal: 31.978863
    Price: 38.877551
    """
    result = changing_growth(two_stage_inputs)

    assert result.model == 'changing'
    assert result.pv_high_growth == pytest.approx(6.898688, abs=1e-6)
    assert result.pv_terminal == pytest.approx(31.978863, abs=1e-6)
    assert result.price == pytest.approx(38.877551, abs=1e-6)
    assert result.price == pytest.approx(result.pv_high_growth +
                                         result.pv_terminal)

  def test_zero_short_years_is_terminal_only(self, two_stage_inputs):
    """n = 0 degenerates to D0(1+gl)/(r-gl)."""
    inputs = ValuationInput(d0=2.0,
                            required_return=12.0,
                            short_growth=20.0,
                            long_growth=4.0,
                            short_years=0)
    result = changing_growth(inputs)

    assert result.pv_high_growth == 0.0
    assert result.price == pytest.approx(2.0 * 1.04 / 0.08, rel=1e-9)

  def test_converges_to_constant_growth(self):
    """With short growth equal to long growth, price matches Gordon."""
    inputs = ValuationInput(d0=2.0,
                            required_return=10.0,
                            constant_growth=4.0,
                            short_growth=4.0,
                            long_growth=4.0,
                            short_years=7)

    assert changing_growth(inputs).price == pytest.approx(
        constant_growth(inputs).price, rel=1e-9)

  def test_converges_in_the_limit(self):
    """Price approaches Gordon as short growth approaches long growth."""
    base = constant_growth(
        ValuationInput(d0=2.0, required_return=10.0, constant_growth=4.0))

    gaps = []
    for short_growth in (6.0, 5.0, 4.5, 4.1, 4.01, 4.001):
      inputs = ValuationInput(d0=2.0,
                              required_return=10.0,
                              short_growth=short_growth,
                              long_growth=4.0,
                              short_years=5)
      gaps.append(abs(changing_growth(inputs).price - base.price))

    assert gaps == sorted(gaps, reverse=True)
    assert gaps[-1] < 0.01

  def test_long_growth_equals_required_return(self, invalid_inputs):
    """gl == r is invalid regardless of the high-growth PV."""
    result = changing_growth(invalid_inputs)

    assert math.isnan(result.price)
    assert math.isnan(result.pv_terminal)
    assert result.pv_high_growth > 0

  def test_high_short_growth_is_still_valid(self):
    """Only the long-term rate is checked against r."""
    inputs = ValuationInput(d0=1.0,
                            required_return=10.0,
                            short_growth=25.0,
                            long_growth=3.0,
                            short_years=5)

    assert changing_growth(inputs).is_valid

  def test_negative_dividend_propagates(self):
    """Negative D0 is not rejected; a negative price is returned."""
    inputs = ValuationInput(d0=-1.0,
                            required_return=10.0,
                            short_growth=5.0,
                            long_growth=2.0,
                            short_years=2)
    result = changing_growth(inputs)

    assert result.is_valid
    assert result.price < 0

  def test_schedule_covers_both_phases(self, two_stage_inputs):
    result = changing_growth(two_stage_inputs, horizon=6)

    assert result.years == (0, 1, 2, 3, 4, 5, 6)
    assert result.cash_flows[4].dividend == pytest.approx(3.59424, rel=1e-12)

  def test_zero_discount_factor_does_not_raise(self):
    """r = -100% makes (1+r)^t zero; the division yields inf, not an error."""
    inputs = ValuationInput(d0=2.0,
                            required_return=-100.0,
                            short_growth=5.0,
                            long_growth=-150.0,
                            short_years=3)
    result = changing_growth(inputs)

    assert result.pv_high_growth == math.inf
    assert result.pv_terminal == -math.inf
    assert not result.is_valid

  def test_overflowing_short_growth_does_not_raise(self):
    """An overflowing high-growth phase propagates inf into the price."""
    inputs = ValuationInput(d0=2.0,
                            required_return=12.0,
                            short_growth=1000.0,
                            long_growth=4.0,
                            short_years=300)
    result = changing_growth(inputs)

    assert result.pv_high_growth == math.inf
    assert result.price == math.inf
    assert result.cash_flows[-1].dividend == math.inf


class TestValueAll:
  """Tests for value_all."""

  def test_keys_and_models(self, growth_inputs):
    results = value_all(growth_inputs)

    assert list(results) == ['constant', 'growth', 'changing']
    for key, result in results.items():
      assert result.model == key

  def test_models_are_independent(self, invalid_inputs):
    """An invalid growth model does not affect the constant model."""
    results = value_all(invalid_inputs)

    assert results['constant'].price == pytest.approx(25.0, rel=1e-12)
    assert not results['growth'].is_valid
    assert not results['changing'].is_valid
