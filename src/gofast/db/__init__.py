"""Run club storage."""

from .run_club_repository import RunClubRepository

__all__ = ["RunClubRepository"]
