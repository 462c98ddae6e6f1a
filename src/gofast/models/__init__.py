"""Data models for the GoFast run draft service."""

from .runs import (
    ALL_PACES_WELCOME,
    AIGenerateRequest,
    AIGenerateResponse,
    ExtractedRunFields,
    RawSourceBundle,
    RunData,
    RunType,
    to_camel,
)
from .clubs import RunClub

__all__ = [
    "ALL_PACES_WELCOME",
    "AIGenerateRequest",
    "AIGenerateResponse",
    "ExtractedRunFields",
    "RawSourceBundle",
    "RunClub",
    "RunData",
    "RunType",
    "to_camel",
]
