"""Run draft data models: raw pasted sources in, structured run fields out."""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def to_camel(string: str) -> str:
    """Convert snake_case to camelCase."""
    components = string.split("_")
    return components[0] + "".join(x.title() for x in components[1:])


class RunType(str, Enum):
    """Kind of route a group run takes, in extraction priority order."""
    TRACK = "track"
    TRAIL = "trail"
    NEIGHBORHOOD = "neighborhood"
    PARK = "park"


ALL_PACES_WELCOME = "All Paces Welcome"


class RawSourceBundle(BaseModel):
    """Everything an organiser pasted in for one run.

    ``contextual_city`` comes from the run club the draft belongs to and is
    never read out of the text itself.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    strava_url: Optional[str] = Field(None, description="Strava route or activity URL")
    strava_text: Optional[str] = Field(None, description="Text copied from a Strava page")
    web_url: Optional[str] = Field(None, description="Club web page URL")
    web_text: Optional[str] = Field(None, description="Text copied from a club web page")
    social_post_text: Optional[str] = Field(None, description="Caption of a social media post")
    contextual_city: Optional[str] = Field(None, description="City of the owning run club")

    def has_source_input(self) -> bool:
        """True when at least one text or URL field has non-blank content."""
        return any(
            value and value.strip()
            for value in (
                self.strava_text,
                self.web_text,
                self.social_post_text,
                self.strava_url,
                self.web_url,
            )
        )


class ExtractedRunFields(BaseModel):
    """Best-effort structured run details. Any field may be missing."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    title: Optional[str] = None
    strava_map_url: Optional[str] = None
    date: Optional[str] = Field(None, description="ISO date (YYYY-MM-DD)")
    start_time_hour: Optional[str] = None
    start_time_minute: Optional[str] = None
    start_time_period: Optional[str] = Field(None, description="AM or PM")
    total_miles: Optional[str] = None
    meet_up_point: Optional[str] = None
    meet_up_city: Optional[str] = None
    route_neighborhood: Optional[str] = None
    run_type: Optional[RunType] = None
    workout_description: Optional[str] = None
    pace: Optional[str] = None
    post_run_activity: Optional[str] = None

    @field_validator("total_miles", mode="before")
    @classmethod
    def coerce_miles(cls, v: Any) -> Any:
        """Accept numeric distances and keep them as text."""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v


class RunData(ExtractedRunFields):
    """Extracted fields plus the synthesized description, as returned to the editor."""

    description: Optional[str] = None

    @classmethod
    def from_fields(cls, fields: ExtractedRunFields, description: str) -> "RunData":
        """Attach a description to an extraction result."""
        return cls(**fields.model_dump(), description=description)


# ============================================================================
# API request/response bodies
# ============================================================================

class AIGenerateRequest(BaseModel):
    """Body of POST /api/runs/ai-generate."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    strava_url: Optional[str] = None
    strava_text: Optional[str] = None
    web_url: Optional[str] = None
    web_text: Optional[str] = None
    ig_post_text: Optional[str] = None
    ig_post_graphic: Optional[str] = Field(
        None, description="Uploaded post image URL; kept for review, not read by extraction"
    )
    run_club_id: Optional[str] = None

    def to_bundle(self, contextual_city: Optional[str] = None) -> RawSourceBundle:
        """Map the request onto the extractor's input."""
        return RawSourceBundle(
            strava_url=self.strava_url,
            strava_text=self.strava_text,
            web_url=self.web_url,
            web_text=self.web_text,
            social_post_text=self.ig_post_text,
            contextual_city=contextual_city,
        )


class AIGenerateResponse(BaseModel):
    """Successful response of POST /api/runs/ai-generate."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    success: bool = True
    run_data: RunData
