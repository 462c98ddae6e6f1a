"""Tests for run description synthesis."""

import pytest

from gofast.models.runs import ALL_PACES_WELCOME, ExtractedRunFields, RunType
from gofast.services.description import synthesize_description


RAW_TEXT = "[WEB TEXT]\nSunday shakeout"


class TestSentenceSelection:

    def test_no_fields_returns_fallback(self):
        assert synthesize_description(ExtractedRunFields(), "raw pasted text") == "raw pasted text"

    def test_fallback_is_returned_verbatim(self):
        assert synthesize_description(ExtractedRunFields(), RAW_TEXT) == RAW_TEXT

    def test_fallback_is_required(self):
        with pytest.raises(TypeError):
            synthesize_description(ExtractedRunFields())

    def test_title_and_date_alone_do_not_make_sentences(self):
        fields = ExtractedRunFields(title="Tempo Tuesday", date="2025-03-15")

        assert synthesize_description(fields, "fallback") == "fallback"

    def test_all_sentences_in_fixed_order(self):
        fields = ExtractedRunFields(
            meet_up_point="Town Square",
            total_miles="5",
            pace=ALL_PACES_WELCOME,
            workout_description="builds aerobic strength",
            post_run_activity="coffee",
        )

        assert synthesize_description(fields, RAW_TEXT) == (
            "This run meets at Town Square. "
            "The route covers 5 miles before returning to the start. "
            "All paces are welcome. "
            "This workout builds aerobic strength. "
            "The run finishes with coffee."
        )

    def test_missing_middle_sentences_are_skipped(self):
        fields = ExtractedRunFields(
            meet_up_point="Town Square",
            total_miles="5",
            pace=ALL_PACES_WELCOME,
            post_run_activity="coffee",
        )

        assert synthesize_description(fields, RAW_TEXT) == (
            "This run meets at Town Square. "
            "The route covers 5 miles before returning to the start. "
            "All paces are welcome. "
            "The run finishes with coffee."
        )

    def test_description_ends_with_single_period(self):
        fields = ExtractedRunFields(post_run_activity="tacos")

        assert synthesize_description(fields, RAW_TEXT) == "The run finishes with tacos."


class TestLocationSentence:

    def test_neighborhood_beats_city(self):
        fields = ExtractedRunFields(
            meet_up_point="Riverside Park",
            route_neighborhood="Back Bay",
            meet_up_city="Boston",
        )

        assert synthesize_description(fields, RAW_TEXT) == (
            "This run meets at Riverside Park in the Back Bay neighborhood."
        )

    def test_city_used_without_neighborhood(self):
        fields = ExtractedRunFields(meet_up_point="Copley Square", meet_up_city="Boston")

        assert synthesize_description(fields, RAW_TEXT) == "This run meets at Copley Square in Boston."

    def test_no_meet_up_point_means_no_location(self):
        fields = ExtractedRunFields(meet_up_city="Boston", route_neighborhood="Back Bay")

        assert synthesize_description(fields, "fallback") == "fallback"


class TestRouteSentence:

    def test_track_returns_to_the_track(self):
        fields = ExtractedRunFields(total_miles="4", run_type=RunType.TRACK)

        assert synthesize_description(fields, RAW_TEXT) == (
            "The route covers 4 miles on track before returning to the track."
        )

    def test_neighborhood_runs_on_streets(self):
        fields = ExtractedRunFields(total_miles="4.5", run_type=RunType.NEIGHBORHOOD)

        assert synthesize_description(fields, RAW_TEXT) == (
            "The route covers 4.5 miles on neighborhood streets before returning to the start."
        )

    def test_trail(self):
        fields = ExtractedRunFields(total_miles="8", run_type=RunType.TRAIL)

        assert synthesize_description(fields, RAW_TEXT) == (
            "The route covers 8 miles on trail before returning to the start."
        )

    def test_park(self):
        fields = ExtractedRunFields(total_miles="3.1", run_type=RunType.PARK)

        assert synthesize_description(fields, RAW_TEXT) == (
            "The route covers 3.1 miles on park before returning to the start."
        )

    def test_miles_without_type(self):
        fields = ExtractedRunFields(total_miles="3")

        assert synthesize_description(fields, RAW_TEXT) == (
            "The route covers 3 miles before returning to the start."
        )

    def test_type_without_miles_has_no_route_sentence(self):
        fields = ExtractedRunFields(run_type=RunType.PARK)

        assert synthesize_description(fields, "fallback") == "fallback"


class TestPaceSentence:

    def test_all_paces(self):
        fields = ExtractedRunFields(pace=ALL_PACES_WELCOME)

        assert synthesize_description(fields, RAW_TEXT) == "All paces are welcome."

    def test_numeric_pace(self):
        fields = ExtractedRunFields(pace="8:00-9:00")

        assert synthesize_description(fields, RAW_TEXT) == "Pace: 8:00-9:00 per mile."


class TestWorkoutSentence:

    def test_track_workout(self):
        fields = ExtractedRunFields(
            run_type=RunType.TRACK,
            workout_description="emphasizes speed",
        )

        assert synthesize_description(fields, RAW_TEXT) == (
            "This is a track workout that emphasizes speed."
        )

    def test_other_workout(self):
        fields = ExtractedRunFields(
            run_type=RunType.TRAIL,
            workout_description="focuses on hill repeats",
        )

        assert synthesize_description(fields, RAW_TEXT) == "This workout focuses on hill repeats."


class TestScenario:

    def test_social_post_description(self):
        fields = ExtractedRunFields(
            title="Saturday Morning Run",
            meet_up_point="Riverside Park",
            route_neighborhood="Back Bay",
            total_miles="4.5",
            run_type=RunType.NEIGHBORHOOD,
            pace=ALL_PACES_WELCOME,
            post_run_activity="coffee at Tatte Bakery",
        )

        assert synthesize_description(fields, RAW_TEXT) == (
            "This run meets at Riverside Park in the Back Bay neighborhood. "
            "The route covers 4.5 miles on neighborhood streets before returning to the start. "
            "All paces are welcome. "
            "The run finishes with coffee at Tatte Bakery."
        )
