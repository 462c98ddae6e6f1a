"""Run club records used to give a run draft its city."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .runs import to_camel


class RunClub(BaseModel):
    """A run club as stored in the club directory."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: str = Field(..., description="Run club identifier")
    slug: str = Field(..., description="URL slug, unique per club")
    name: str = Field(..., description="Display name")
    city: Optional[str] = Field(None, description="Home city of the club")
    created_at: Optional[datetime] = None
