"""AI augmentation: provider client and per-entry orchestration."""

from .client import (
    SUMMARY_UNAVAILABLE,
    UNTITLED,
    AugmentationClient,
    TitleSuggestion,
    build_context,
    parse_suggestion,
)
from .orchestrator import AugmentationOrchestrator, AugmentationState

__all__ = [
    "SUMMARY_UNAVAILABLE",
    "UNTITLED",
    "AugmentationClient",
    "AugmentationOrchestrator",
    "AugmentationState",
    "TitleSuggestion",
    "build_context",
    "parse_suggestion",
]
