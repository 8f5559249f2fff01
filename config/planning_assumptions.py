# config/planning_assumptions.py
# Engine-wide planning defaults. Scenario-specific defaults live in default_setup.xml.

# Market
default_portfolio_growth_pct = 5.0
default_inflation_pct = 2.5

# Medicare
medicare_start_age = 65

# Conversions
conversion_stop_never = 9999      # "always" window: no stop year inside any horizon

# Projection horizon
min_projection_years = 10
default_remaining_years = 20      # used when the primary's birth year is unknown

# Legacy
heir_drawdown_years = 10          # SECURE Act 10-year inherited IRA rule, flat spread
