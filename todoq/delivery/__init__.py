"""Email delivery of completed-task summaries."""

from __future__ import annotations

from todoq.delivery.smtp import SummaryDelivery

__all__ = ["SummaryDelivery"]
