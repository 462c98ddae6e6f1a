"""
Run draft generation service.

Ties the pieces together for the run editor: look up the club's city,
extract fields from the pasted sources and write a description for them.
"""

import logging
from functools import lru_cache
from typing import Optional

from ..config import get_settings
from ..db.run_club_repository import RunClubRepository
from ..models.runs import AIGenerateRequest, RawSourceBundle, RunData
from .description import synthesize_description
from .run_extraction import build_combined_text, extract_run_fields

logger = logging.getLogger(__name__)


class RunGenerationService:
    """Builds editable run drafts from pasted source text."""

    def __init__(
        self,
        run_club_repository: Optional[RunClubRepository] = None,
        max_source_chars: Optional[int] = None,
    ):
        """
        Initialize the service.

        Args:
            run_club_repository: Club directory used to resolve a club's city.
                Without one, drafts never get a city.
            max_source_chars: Longest text accepted per source; longer
                input is truncated before extraction.
        """
        self._clubs = run_club_repository
        self._max_source_chars = max_source_chars

    def resolve_city(self, run_club_id: Optional[str]) -> Optional[str]:
        """City of the given club, or None when it cannot be resolved."""
        if not run_club_id or self._clubs is None:
            return None
        city = self._clubs.get_city(run_club_id)
        if city is None:
            logger.info(f"No city found for run club {run_club_id}")
        return city

    def _truncate(self, value: Optional[str], field: str) -> Optional[str]:
        if value is None or self._max_source_chars is None:
            return value
        if len(value) > self._max_source_chars:
            logger.warning(
                f"Truncating {field} from {len(value)} to {self._max_source_chars} characters"
            )
            return value[: self._max_source_chars]
        return value

    def generate(self, bundle: RawSourceBundle) -> RunData:
        """Extract fields from a bundle and attach a synthesized description.

        Raises:
            NoSourceInputError: If the bundle has no text or URL content.
        """
        bundle = bundle.model_copy(
            update={
                name: self._truncate(getattr(bundle, name), name)
                for name in ("strava_text", "web_text", "social_post_text")
            }
        )
        fields = extract_run_fields(bundle)
        description = synthesize_description(fields, build_combined_text(bundle))
        return RunData.from_fields(fields, description)

    def generate_from_request(self, request: AIGenerateRequest) -> RunData:
        """Resolve the request's club city, then generate the draft."""
        city = self.resolve_city(request.run_club_id)
        return self.generate(request.to_bundle(contextual_city=city))


@lru_cache
def get_run_generation_service() -> RunGenerationService:
    """Get or create the RunGenerationService instance."""
    settings = get_settings()
    repository = RunClubRepository(str(settings.database_path))
    return RunGenerationService(
        run_club_repository=repository,
        max_source_chars=settings.max_source_chars,
    )
