'''
Renderers for calculator results.

Each renderer consumes ValuationResult objects and has no computational
role of its own:
  table: cash-flow schedule table (pandas)
  chart: grouped bar chart with keyboard view state (matplotlib)
  equations: formulas with the inputs substituted
'''
