'''
Dividend discount model calculator.

This package values a stock under three textbook dividend discount models
(constant dividend, constant growth and two-stage "changing" growth) and
renders the results as a cash-flow table, a bar chart and annotated
equations.

Usage:
  from ddm.domain.types import ValuationInput
  from ddm.scenarios.registry import evaluate

  inputs = ValuationInput(d0=2.0, required_return=10.0, constant_growth=4.0)
  results = evaluate(inputs, selected='growth')
  print(f"Price: {results['growth'].price:.2f}")
'''
