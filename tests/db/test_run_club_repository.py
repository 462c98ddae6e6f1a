"""Tests for the SQLite run club repository."""

import sqlite3

import pytest

from gofast.db.run_club_repository import RunClubRepository
from gofast.exceptions import DatabaseError, NotFoundError, RunClubNotFoundError
from gofast.models.clubs import RunClub


@pytest.fixture
def repo(tmp_path):
    return RunClubRepository(str(tmp_path / "nested" / "clubs.db"))


@pytest.fixture
def club():
    return RunClub(id="club-1", slug="back-bay-runners", name="Back Bay Runners", city="Boston")


class TestSchema:

    def test_creates_parent_directories_and_table(self, tmp_path):
        db_path = tmp_path / "a" / "b" / "clubs.db"
        RunClubRepository(str(db_path))

        with sqlite3.connect(db_path) as conn:
            tables = {row[0] for row in conn.execute(
                "SELECT name FROM sqlite_master WHERE type='table'"
            )}
        assert "run_clubs" in tables

    def test_reopening_keeps_data(self, tmp_path, club):
        db_path = str(tmp_path / "clubs.db")
        RunClubRepository(db_path).save(club)

        assert RunClubRepository(db_path).get("club-1") is not None


class TestSaveAndGet:

    def test_save_returns_stored_club(self, repo, club):
        saved = repo.save(club)

        assert saved.id == "club-1"
        assert saved.city == "Boston"
        assert saved.created_at is not None

    def test_save_updates_existing(self, repo, club):
        repo.save(club)
        repo.save(club.model_copy(update={"city": "Cambridge"}))

        assert repo.get_city("club-1") == "Cambridge"
        assert len(repo.list_all()) == 1

    def test_get_missing(self, repo):
        assert repo.get("missing") is None

    def test_get_by_slug(self, repo, club):
        repo.save(club)

        assert repo.get_by_slug("back-bay-runners").id == "club-1"
        assert repo.get_by_slug("nope") is None

    def test_duplicate_slug_is_database_error(self, repo, club):
        repo.save(club)

        with pytest.raises(DatabaseError):
            repo.save(RunClub(id="club-2", slug="back-bay-runners", name="Copycats"))


class TestCity:

    def test_city_of_known_club(self, repo, club):
        repo.save(club)

        assert repo.get_city("club-1") == "Boston"

    def test_city_of_unknown_club(self, repo):
        assert repo.get_city("club-404") is None

    def test_club_without_city(self, repo):
        repo.save(RunClub(id="club-3", slug="nomads", name="Nomads"))

        assert repo.get_city("club-3") is None


class TestListAndDelete:

    def test_list_ordered_by_name(self, repo):
        repo.save(RunClub(id="2", slug="zeta", name="Zeta Striders"))
        repo.save(RunClub(id="1", slug="alpha", name="Alpha Harriers"))

        assert [c.name for c in repo.list_all()] == ["Alpha Harriers", "Zeta Striders"]

    def test_delete(self, repo, club):
        repo.save(club)
        repo.delete("club-1")

        assert repo.get("club-1") is None

    def test_delete_missing_raises(self, repo):
        with pytest.raises(RunClubNotFoundError) as exc_info:
            repo.delete("club-404")

        assert isinstance(exc_info.value, NotFoundError)
        assert exc_info.value.status_code == 404
