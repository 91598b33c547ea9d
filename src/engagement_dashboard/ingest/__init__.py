"""Ingestion helpers: read an engagement CSV and hand back a clean frame."""

from engagement_dashboard.ingest.load import load_engagement_data

__all__ = ["load_engagement_data"]
