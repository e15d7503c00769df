"""Smart summary generation for submitted filings."""

from presolve.summary.generator import (
    EMPTY_SUMMARY,
    SmartSummaryGenerator,
    Summarizer,
    build_summary_prompt,
    fallback_summary,
)

__all__ = [
    "EMPTY_SUMMARY",
    "SmartSummaryGenerator",
    "Summarizer",
    "build_summary_prompt",
    "fallback_summary",
]
