"""engagement_dashboard package.

Contains modules for ingesting a monthly engagement CSV (fiscal year, month,
four channel counts and a total), cleaning it into a typed row table, and a
pure aggregation engine producing yearly totals, growth goals, goal-tracking
series, seasonality statistics and projections for a Streamlit dashboard.

Architecture:
- CSV → clean frame → aggregate outputs, all in memory
- pandas is used for parsing and grouping
- Pydantic models type the raw rows and every engine output
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
