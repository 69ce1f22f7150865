'''
Valuation analysis utilities.

Note: To avoid RuntimeWarning when using -m flag, import directly:
  from ddm.analysis.sensitivity import SensitivityTableBuilder
'''

__all__ = [
    'SensitivityTableBuilder',
]

from ddm.analysis.sensitivity import SensitivityTableBuilder
