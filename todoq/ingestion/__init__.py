"""AI ingestion pipeline: document/text -> Gemini -> validated task strings."""

from __future__ import annotations

from todoq.ingestion.errors import IngestionError
from todoq.ingestion.service import extract_tasks

__all__ = ["IngestionError", "extract_tasks"]
