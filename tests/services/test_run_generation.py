"""Tests for RunGenerationService."""

import logging
from unittest.mock import MagicMock

import pytest

from gofast.db.run_club_repository import RunClubRepository
from gofast.exceptions import NoSourceInputError
from gofast.models.clubs import RunClub
from gofast.models.runs import AIGenerateRequest, RawSourceBundle, RunData
from gofast.services.run_generation import RunGenerationService


@pytest.fixture
def repository(tmp_path):
    repo = RunClubRepository(str(tmp_path / "clubs.db"))
    repo.save(RunClub(id="club-1", slug="back-bay-runners", name="Back Bay Runners", city="Boston"))
    repo.save(RunClub(id="club-2", slug="no-city-club", name="No City Club"))
    return repo


@pytest.fixture
def service(repository):
    return RunGenerationService(run_club_repository=repository, max_source_chars=500)


class TestResolveCity:

    def test_known_club(self, service):
        assert service.resolve_city("club-1") == "Boston"

    def test_club_without_city(self, service):
        assert service.resolve_city("club-2") is None

    def test_unknown_club(self, service, caplog):
        with caplog.at_level(logging.INFO):
            assert service.resolve_city("club-404") is None
        assert "club-404" in caplog.text

    def test_no_club_id(self, service):
        assert service.resolve_city(None) is None
        assert service.resolve_city("") is None

    def test_no_repository(self):
        assert RunGenerationService().resolve_city("club-1") is None

    def test_repository_not_touched_without_id(self):
        repo = MagicMock()
        RunGenerationService(run_club_repository=repo).resolve_city(None)
        repo.get_city.assert_not_called()


class TestGenerate:

    def test_returns_run_data_with_description(self, service, scenario_post):
        run_data = service.generate(RawSourceBundle(social_post_text=scenario_post))

        assert isinstance(run_data, RunData)
        assert run_data.meet_up_point == "Riverside Park"
        assert run_data.description.startswith("This run meets at Riverside Park")

    def test_no_input_raises(self, service):
        with pytest.raises(NoSourceInputError):
            service.generate(RawSourceBundle())

    def test_description_falls_back_to_combined_text(self, service):
        run_data = service.generate(RawSourceBundle(web_text="hello"))

        assert run_data.title == "hello"
        assert run_data.description == "[WEB TEXT]\nhello"

    def test_long_sources_are_truncated(self, service, caplog):
        text = "Covers 6 miles. " + "x" * 1000 + " Covers 9 miles"

        with caplog.at_level(logging.WARNING):
            run_data = service.generate(RawSourceBundle(web_text=text))

        assert run_data.total_miles == "6"
        assert "Truncating web_text" in caplog.text

    def test_text_past_the_limit_is_ignored(self, service):
        text = "x" * 600 + " Covers 9 miles"

        assert service.generate(RawSourceBundle(web_text=text)).total_miles is None

    def test_urls_are_not_truncated(self):
        url = "https://www.strava.com/routes/" + "1" * 40
        run_data = RunGenerationService(max_source_chars=10).generate(
            RawSourceBundle(strava_url=url)
        )

        assert run_data.strava_map_url == url


class TestGenerateFromRequest:

    def test_city_comes_from_club(self, service):
        request = AIGenerateRequest(ig_post_text="Meet at Boylston Street", run_club_id="club-1")

        run_data = service.generate_from_request(request)

        assert run_data.meet_up_city == "Boston"
        assert run_data.description == "This run meets at Boylston Street in Boston."

    def test_unknown_club_still_generates(self, service):
        request = AIGenerateRequest(ig_post_text="Meet at Boylston Street", run_club_id="nope")

        run_data = service.generate_from_request(request)

        assert run_data.meet_up_city is None
        assert run_data.meet_up_point == "Boylston Street"

    def test_graphic_is_not_a_source(self, service):
        request = AIGenerateRequest(ig_post_graphic="https://cdn.example/post.png")

        with pytest.raises(NoSourceInputError):
            service.generate_from_request(request)

    def test_camel_case_body_is_accepted(self, service):
        request = AIGenerateRequest.model_validate({
            "igPostText": "Trail run, 6 miles",
            "runClubId": "club-1",
        })

        run_data = service.generate_from_request(request)

        assert run_data.run_type.value == "trail"
        assert run_data.total_miles == "6"
