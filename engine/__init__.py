# engine/__init__.py

# Public entry points: the projection, its horizon helpers, and tabular views.
from .projection import project, rows_to_dataframe, comparison_frame
from .life_expectancy import compute_projection_years, expected_age

__all__ = ["project", "compute_projection_years", "expected_age", "rows_to_dataframe", "comparison_frame"]
