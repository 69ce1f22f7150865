'''Dividend discount engine with pure math functions.'''

from ddm.engine.dividend import changing_growth
from ddm.engine.dividend import compute_pv_high_growth
from ddm.engine.dividend import compute_terminal_value
from ddm.engine.dividend import constant_dividend
from ddm.engine.dividend import constant_growth
from ddm.engine.dividend import DEFAULT_HORIZON
from ddm.engine.dividend import growth_schedule
from ddm.engine.dividend import two_stage_schedule
from ddm.engine.dividend import value_all

__all__ = [
    'DEFAULT_HORIZON',
    'changing_growth',
    'compute_pv_high_growth',
    'compute_terminal_value',
    'constant_dividend',
    'constant_growth',
    'growth_schedule',
    'two_stage_schedule',
    'value_all',
]
