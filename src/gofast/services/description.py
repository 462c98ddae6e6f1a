"""Compose the run description shown in the run editor from extracted fields."""

from typing import List, Optional

from ..models.runs import ALL_PACES_WELCOME, ExtractedRunFields, RunType


ROUTE_SURFACES = {
    RunType.NEIGHBORHOOD: "neighborhood streets",
    RunType.TRACK: "track",
    RunType.TRAIL: "trail",
    RunType.PARK: "park",
}


def _location_sentence(fields: ExtractedRunFields) -> Optional[str]:
    if not fields.meet_up_point:
        return None
    sentence = f"This run meets at {fields.meet_up_point}"
    if fields.route_neighborhood:
        sentence += f" in the {fields.route_neighborhood} neighborhood"
    elif fields.meet_up_city:
        sentence += f" in {fields.meet_up_city}"
    return sentence


def _route_sentence(fields: ExtractedRunFields) -> Optional[str]:
    if not fields.total_miles:
        return None
    sentence = f"The route covers {fields.total_miles} miles"
    if fields.run_type:
        sentence += f" on {ROUTE_SURFACES[fields.run_type]}"
    if fields.run_type == RunType.TRACK:
        sentence += " before returning to the track"
    else:
        sentence += " before returning to the start"
    return sentence


def _pace_sentence(fields: ExtractedRunFields) -> Optional[str]:
    if fields.pace == ALL_PACES_WELCOME:
        return "All paces are welcome"
    if fields.pace:
        return f"Pace: {fields.pace} per mile"
    return None


def _workout_sentence(fields: ExtractedRunFields) -> Optional[str]:
    if not fields.workout_description:
        return None
    if fields.run_type == RunType.TRACK:
        return f"This is a track workout that {fields.workout_description}"
    return f"This workout {fields.workout_description}"


def _post_run_sentence(fields: ExtractedRunFields) -> Optional[str]:
    if not fields.post_run_activity:
        return None
    return f"The run finishes with {fields.post_run_activity}"


def synthesize_description(fields: ExtractedRunFields, fallback_text: str) -> str:
    """Build a one-paragraph summary of a run.

    Sentences always appear in the same order: meeting point, route,
    pace, workout focus, post-run plans. Only sentences whose fields are
    present are included.

    Args:
        fields: Extraction result to describe.
        fallback_text: Raw text the fields came from. Returned unchanged
            when no sentence can be built, so the editor never shows an
            empty description.

    Returns:
        The description paragraph.
    """
    sentences: List[Optional[str]] = [
        _location_sentence(fields),
        _route_sentence(fields),
        _pace_sentence(fields),
        _workout_sentence(fields),
        _post_run_sentence(fields),
    ]
    parts = [sentence for sentence in sentences if sentence]
    if not parts:
        return fallback_text
    return ". ".join(parts) + "."
