"""
Bond Valuation Engine

Modules:
- config: input bounds presets + calculator defaults
- bonds: parameters/result types, validation, pricing + cash-flow schedule
- analysis: par/premium/discount classification + narrative analytics
- schedule: cash-flow table and chart series as DataFrames
- risk: DV01/duration/convexity + yield-from-price solve
- scenarios: yield shock repricing + price/yield curve
- utils: period rounding, discount factors, percent/decimal conversion
- cli: command-line calculator

Rates are decimals throughout (0.086 = 8.6%); percent inputs are converted at the CLI.
"""
