"""Aggregation engine.

This package contains the pure functions that turn the clean engagement
table into everything the dashboard renders: yearly totals and growth goals,
12-month goal-tracking series, seasonality statistics, and year-end
projections. Nothing here performs I/O or keeps state between calls.
"""
