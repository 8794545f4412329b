"""Quality summary reporting (plain text and HTML)."""

from .context import build_summary_context
from .exceptions import ReportRenderError
from .renderer import SummaryRenderer

__all__ = ["build_summary_context", "ReportRenderError", "SummaryRenderer"]
