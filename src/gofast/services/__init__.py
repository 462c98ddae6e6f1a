"""Run draft services."""

from .description import synthesize_description
from .run_extraction import build_combined_text, extract_run_fields
from .run_generation import RunGenerationService, get_run_generation_service

__all__ = [
    "RunGenerationService",
    "build_combined_text",
    "extract_run_fields",
    "get_run_generation_service",
    "synthesize_description",
]
