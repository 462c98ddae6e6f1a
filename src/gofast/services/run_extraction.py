"""
Run field extraction from pasted text.

Organisers paste whatever they have for a group run (a Strava page, the
club website, a social post caption) and this module pre-fills the run
form from it. Extraction is a deterministic heuristic: every field owns an
ordered list of regex rules, each rule is searched once over the combined
text, and the first rule that yields an acceptable value wins.

Fields that cannot be found are left empty. The only hard failure is a
bundle with no text or URL at all.
"""

import logging
import re
from dataclasses import dataclass
from datetime import date
from typing import Callable, List, Optional, Pattern, Sequence, Tuple

from ..exceptions import NoSourceInputError
from ..models.runs import (
    ALL_PACES_WELCOME,
    ExtractedRunFields,
    RawSourceBundle,
    RunType,
)

logger = logging.getLogger(__name__)


SOURCE_SEPARATOR = "\n\n---\n\n"

# Order matters: earlier sources win when several state the same fact.
SOURCE_TAGS: List[Tuple[str, str]] = [
    ("strava_text", "[STRAVA TEXT]"),
    ("web_text", "[WEB TEXT]"),
    ("social_post_text", "[IG POST TEXT]"),
    ("strava_url", "[STRAVA URL]"),
    ("web_url", "[WEB URL]"),
]

DEFAULT_PERIOD = "AM"

MIN_MEET_UP_LENGTH = 5
MIN_WORKOUT_LENGTH = 10
MIN_POST_RUN_LENGTH = 5


# ============================================================================
# Pattern building blocks
# ============================================================================

# A capitalised place name, ending at punctuation, a line break or a preposition.
_PLACE = r"([A-Z][^\n.,;!?]*?)(?=\s+(?:in|on|for|with|near|by)\b|[\n.,;!?]|$)"

# One or two capitalised words.
_AREA_NAME = r"[A-Z][a-z]+(?: [A-Z][a-z]+)?"

# The rest of a sentence.
_CLAUSE = r"[^.!?\n]+"

_PACE_TOKEN = r"\d{1,2}:\d{2}(?:\s*-\s*\d{1,2}:\d{2})?"

_WORKOUT_VERBS = (
    r"(?:emphasi[sz]es|focuses\s+on|targets|builds|works\s+on|is\s+designed\s+for)"
)

_TRAILING_CONNECTOR = re.compile(
    r"\s+(?:and|or|before|after|then|to|does|miles)\b.*$",
    re.IGNORECASE,
)

_STRAVA_URL = re.compile(r"https?://(?:www\.)?strava\.com/\S+", re.IGNORECASE)
_DATE = re.compile(r"(\d{1,2})/(\d{1,2})/(\d{2,4})|(\d{4})-(\d{2})-(\d{2})")
_TIME = re.compile(r"(\d{1,2}):(\d{2})\s*(am|pm)?", re.IGNORECASE)
_MILES = re.compile(r"(\d+(?:\.\d+)?)\s*(?:miles|mile|mi)\b", re.IGNORECASE)


def strip_trailing_connectors(text: str) -> str:
    """Cut a captured clause at its first connector word ("and", "then", ...)."""
    return _TRAILING_CONNECTOR.sub("", text).strip()


def _compact(text: str) -> str:
    return re.sub(r"\s+", "", text)


@dataclass(frozen=True)
class ExtractionRule:
    """One step of a field's cascade.

    Attributes:
        pattern: Compiled regex searched once over the combined text.
        group: Capture group holding the value.
        clean: Strip trailing connector words from the capture.
        min_length: Reject captures shorter than this after cleanup.
        value: Constant result returned on any match instead of the capture.
        normalize: Optional transform applied to the raw capture.
    """

    pattern: Pattern[str]
    group: int = 1
    clean: bool = False
    min_length: int = 1
    value: Optional[str] = None
    normalize: Optional[Callable[[str], str]] = None

    def apply(self, text: str) -> Optional[str]:
        """Return the accepted value for this rule, or None."""
        match = self.pattern.search(text)
        if match is None:
            return None
        if self.value is not None:
            return self.value

        candidate = match.group(self.group) or ""
        if self.normalize is not None:
            candidate = self.normalize(candidate)
        if self.clean:
            candidate = strip_trailing_connectors(candidate)
        candidate = candidate.strip()

        if len(candidate) < self.min_length:
            return None
        return candidate


def run_cascade(rules: Sequence[ExtractionRule], text: str) -> Optional[str]:
    """Try rules in order and return the first accepted value."""
    for rule in rules:
        result = rule.apply(text)
        if result is not None:
            return result
    return None


# ============================================================================
# Cascades (literal order is part of the behaviour)
# ============================================================================

MEET_UP_RULES: List[ExtractionRule] = [
    # "meets at", "starts at", "location at"
    ExtractionRule(
        re.compile(r"(?i:\b(?:meets|starts|location)\s+at)\s+" + _PLACE),
        clean=True,
        min_length=MIN_MEET_UP_LENGTH,
    ),
    # "meet ...", "start: ...", "location at ..."
    ExtractionRule(
        re.compile(
            r"(?i:\b(?:meet|start|location)\b)(?:\s*:\s*|\s+(?i:at)\s+|\s+)" + _PLACE
        ),
        clean=True,
        min_length=MIN_MEET_UP_LENGTH,
    ),
    # bare "at ..."
    ExtractionRule(
        re.compile(r"(?i:\bat)\s+" + _PLACE),
        clean=True,
        min_length=MIN_MEET_UP_LENGTH,
    ),
]

NEIGHBORHOOD_RULES: List[ExtractionRule] = [
    ExtractionRule(
        re.compile(rf"\b({_AREA_NAME}) (?i:neighbou?rhood|area|district)\b"),
    ),
    ExtractionRule(
        re.compile(rf"\b({_AREA_NAME} (?:Heights|Village|Square|Commons))\b"),
    ),
    ExtractionRule(
        re.compile(rf"(?i:\b(?:neighbou?rhood|area|district))\s*:\s*({_AREA_NAME})"),
    ),
]

# Checked in priority order: track, trail, neighborhood, park.
RUN_TYPE_RULES: List[ExtractionRule] = [
    ExtractionRule(re.compile(r"\btrack\b", re.IGNORECASE), value=RunType.TRACK.value),
    ExtractionRule(re.compile(r"\btrails?\b", re.IGNORECASE), value=RunType.TRAIL.value),
    ExtractionRule(
        re.compile(r"\bneighbou?rhoods?\b|\bstreets\b", re.IGNORECASE),
        value=RunType.NEIGHBORHOOD.value,
    ),
    ExtractionRule(re.compile(r"\bparks?\b", re.IGNORECASE), value=RunType.PARK.value),
]

WORKOUT_RULES: List[ExtractionRule] = [
    ExtractionRule(
        re.compile(rf"\bworkout\s+that\s+({_WORKOUT_VERBS}\s+{_CLAUSE})", re.IGNORECASE),
        clean=True,
        min_length=MIN_WORKOUT_LENGTH,
    ),
    ExtractionRule(
        re.compile(
            rf"\b(?:workout|session)\s+((?:{_WORKOUT_VERBS}|designed\s+for)\s+{_CLAUSE})",
            re.IGNORECASE,
        ),
        clean=True,
        min_length=MIN_WORKOUT_LENGTH,
    ),
    ExtractionRule(
        re.compile(rf"\b((?:designed\s+for|focus(?:es)?\s+on)\s+{_CLAUSE})", re.IGNORECASE),
        clean=True,
        min_length=MIN_WORKOUT_LENGTH,
    ),
    ExtractionRule(
        re.compile(rf"\bworkout\s*:\s*({_CLAUSE})", re.IGNORECASE),
        clean=True,
        min_length=MIN_WORKOUT_LENGTH,
    ),
]

PACE_RULES: List[ExtractionRule] = [
    ExtractionRule(
        re.compile(r"\ball\s+paces?\s+(?:are\s+)?welcome\b", re.IGNORECASE),
        value=ALL_PACES_WELCOME,
    ),
    ExtractionRule(
        re.compile(rf"\bpace\s*:\s*({_PACE_TOKEN})", re.IGNORECASE),
        normalize=_compact,
    ),
    ExtractionRule(
        re.compile(
            rf"({_PACE_TOKEN})\s*(?:pace\b|min(?:utes?)?\s*(?:per\s+|/)\s*mi(?:le)?\b)",
            re.IGNORECASE,
        ),
        normalize=_compact,
    ),
    ExtractionRule(
        re.compile(rf"\b(?:pace|speed)\s*:?\s*({_PACE_TOKEN})\s*min", re.IGNORECASE),
        normalize=_compact,
    ),
]

POST_RUN_RULES: List[ExtractionRule] = [
    ExtractionRule(
        re.compile(rf"\b(?:finishes|ends|concludes)\s+with\s+({_CLAUSE})", re.IGNORECASE),
        clean=True,
        min_length=MIN_POST_RUN_LENGTH,
    ),
    ExtractionRule(
        re.compile(rf"\bpost[-\s]run\s*:?\s*({_CLAUSE})", re.IGNORECASE),
        clean=True,
        min_length=MIN_POST_RUN_LENGTH,
    ),
    ExtractionRule(
        re.compile(rf"\b(?:after|following)\s+the\s+run\s*,?\s*({_CLAUSE})", re.IGNORECASE),
        clean=True,
        min_length=MIN_POST_RUN_LENGTH,
    ),
    ExtractionRule(
        re.compile(
            r"\b((?i:social|coffee|drinks|food|breakfast|brunch)\s+(?i:at|in|near)\s+[A-Z][^.!?\n]*)"
        ),
        clean=True,
        min_length=MIN_POST_RUN_LENGTH,
    ),
]


# ============================================================================
# Single-pattern fields
# ============================================================================

def build_combined_text(bundle: RawSourceBundle) -> str:
    """Concatenate every non-blank source, tagged, in precedence order."""
    parts = []
    for attribute, tag in SOURCE_TAGS:
        value = getattr(bundle, attribute)
        if value and value.strip():
            parts.append(f"{tag}\n{value.strip()}")
    return SOURCE_SEPARATOR.join(parts)


def extract_title(text: str) -> Optional[str]:
    """First non-blank line that is not a source tag."""
    for line in text.split("\n"):
        stripped = line.strip()
        if stripped and not stripped.startswith("["):
            return stripped
    return None


def extract_strava_url(text: str, explicit_url: Optional[str] = None) -> Optional[str]:
    if explicit_url and explicit_url.strip():
        return explicit_url.strip()
    match = _STRAVA_URL.search(text)
    return match.group(0) if match else None


def parse_date_token(token: str) -> Optional[str]:
    """Parse ``M/D/YY``, ``M/D/YYYY`` or ``YYYY-MM-DD`` into an ISO date.

    Returns None for anything that is not a real calendar date.
    """
    match = _DATE.fullmatch(token.strip())
    if match is None:
        return None

    if match.group(1) is not None:
        month, day, year_text = int(match.group(1)), int(match.group(2)), match.group(3)
        if len(year_text) == 2:
            year = int(year_text)
            year += 2000 if year < 50 else 1900
        elif len(year_text) == 4:
            year = int(year_text)
        else:
            return None
    else:
        year, month, day = int(match.group(4)), int(match.group(5)), int(match.group(6))

    try:
        return date(year, month, day).isoformat()
    except ValueError:
        logger.debug(f"Discarding invalid date token {token!r}")
        return None


def extract_date(text: str) -> Optional[str]:
    """ISO date of the first date-like token; only that token is considered."""
    match = _DATE.search(text)
    if match is None:
        return None
    return parse_date_token(match.group(0))


def extract_start_time(text: str) -> Tuple[Optional[str], Optional[str], str]:
    """Return (hour, minute, period) for the first ``H:MM [am|pm]`` token."""
    match = _TIME.search(text)
    if match is None:
        return None, None, DEFAULT_PERIOD

    period = DEFAULT_PERIOD
    if match.group(3):
        period = "PM" if match.group(3).upper().startswith("P") else "AM"
    return match.group(1), match.group(2), period


def extract_total_miles(text: str) -> Optional[str]:
    match = _MILES.search(text)
    return match.group(1) if match else None


def extract_run_type(text: str) -> Optional[RunType]:
    result = run_cascade(RUN_TYPE_RULES, text)
    return RunType(result) if result else None


# ============================================================================
# Entry point
# ============================================================================

def extract_run_fields(bundle: RawSourceBundle) -> ExtractedRunFields:
    """Pre-fill run fields from a bundle of pasted sources.

    Args:
        bundle: Raw text and URLs, plus the owning club's city if known.

    Returns:
        ExtractedRunFields with every field that could be found. Missing
        fields are None; that is the normal outcome, not an error.

    Raises:
        NoSourceInputError: If no text or URL field has any content.
    """
    if not bundle.has_source_input():
        logger.warning("Run extraction requested without any source input")
        raise NoSourceInputError()

    text = build_combined_text(bundle)
    hour, minute, period = extract_start_time(text)

    fields = ExtractedRunFields(
        title=extract_title(text),
        strava_map_url=extract_strava_url(text, bundle.strava_url),
        date=extract_date(text),
        start_time_hour=hour,
        start_time_minute=minute,
        start_time_period=period,
        total_miles=extract_total_miles(text),
        meet_up_point=run_cascade(MEET_UP_RULES, text),
        meet_up_city=bundle.contextual_city,
        route_neighborhood=run_cascade(NEIGHBORHOOD_RULES, text),
        run_type=extract_run_type(text),
        workout_description=run_cascade(WORKOUT_RULES, text),
        pace=run_cascade(PACE_RULES, text),
        post_run_activity=run_cascade(POST_RUN_RULES, text),
    )

    found = [name for name, value in fields.model_dump().items() if value is not None]
    logger.debug(f"Extracted {len(found)} run fields: {', '.join(found)}")
    return fields
