"""Cleaning utilities for the engagement table.

Provides functions to map source CSV headers onto the clean schema, coerce
every count to an integer (0 when missing or non-numeric), drop rows without
a fiscal year, and validate rows against the Pydantic row model.
"""
