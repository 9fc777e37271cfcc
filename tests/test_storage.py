"""Tests for key-value stores, the user session and persona persistence."""

import json

import pytest

from story_reader.config import ReaderConfig
from story_reader.models import PersonaAnswers, PersonaLabel, User
from story_reader.storage import (
    PERSONA_KEY,
    USER_KEY,
    JsonFileStore,
    PersonaRepository,
    SqliteStore,
    UserSession,
    create_store,
)


@pytest.fixture(params=["json", "sqlite"])
def any_store(request, tmp_path):
    """Each store backend in turn."""
    if request.param == "json":
        return JsonFileStore(str(tmp_path / "store.json"))
    return SqliteStore(str(tmp_path / "store.db"))


class TestKeyValueStores:
    """Behaviour shared by both backends."""

    def test_missing_key(self, any_store):
        assert any_store.get("nothing") is None

    def test_set_get_overwrite(self, any_store):
        any_store.set("k", {"a": 1})
        any_store.set("k", {"a": 2, "b": [1, 2]})
        assert any_store.get("k") == {"a": 2, "b": [1, 2]}

    def test_delete(self, any_store):
        any_store.set("k", [1])
        any_store.delete("k")
        any_store.delete("k")  # Deleting twice is fine
        assert any_store.get("k") is None

    def test_json_store_persists_to_disk(self, tmp_path):
        path = tmp_path / "nested" / "store.json"
        JsonFileStore(str(path)).set(USER_KEY, {"id": "U1"})

        assert json.loads(path.read_text()) == {USER_KEY: {"id": "U1"}}
        assert JsonFileStore(str(path)).get(USER_KEY) == {"id": "U1"}

    def test_sqlite_store_survives_reopen(self, tmp_path):
        db_path = str(tmp_path / "store.db")
        SqliteStore(db_path).set(PERSONA_KEY, {"vibes": ["Dark & Brooding"]})

        assert SqliteStore(db_path).get(PERSONA_KEY) == {"vibes": ["Dark & Brooding"]}


class TestCreateStore:
    """Tests for backend selection."""

    def test_json_backend(self, tmp_path):
        config = ReaderConfig(store_backend="json", store_path=str(tmp_path / "s.json"))
        assert isinstance(create_store(config), JsonFileStore)

    def test_sqlite_backend(self, tmp_path):
        config = ReaderConfig(store_backend="sqlite", store_path=str(tmp_path / "s.db"))
        assert isinstance(create_store(config), SqliteStore)

    def test_unknown_backend(self, tmp_path):
        with pytest.raises(ValueError):
            create_store(ReaderConfig(store_backend="redis"))


class TestUserSession:
    """Tests for the session provider."""

    def test_signed_out_by_default(self, store):
        session = UserSession(store)
        assert session.current_user is None
        assert session.update_user(name="x") is None

    def test_login_persists(self, store, user):
        UserSession(store).login(user)

        reloaded = UserSession(store).current_user
        assert reloaded.id == user.id
        assert reloaded.email == user.email

    def test_logout_clears(self, session, store):
        session.logout()

        assert session.current_user is None
        assert store.get(USER_KEY) is None

    def test_persist_history(self, session, store, make_entry):
        session.persist_history([make_entry("a", position=3, pct=60)])

        stored = store.get(USER_KEY)["history"]
        assert stored == [{
            "contentItemId": "a",
            "absolutePosition": 3,
            "timestamp": "2026-01-01T10:00:00",
            "progressPercentage": 60,
        }]

    def test_persist_history_signed_out_is_noop(self, store, make_entry):
        session = UserSession(store)
        session.persist_history([make_entry("a")])
        assert store.get(USER_KEY) is None

    def test_update_unknown_field(self, session):
        with pytest.raises(AttributeError):
            session.update_user(wallet="0xabc")

    def test_reads_legacy_history(self, store):
        store.set(USER_KEY, {
            "id": "U_OLD",
            "email": "old@example.com",
            "favorites": ["c1"],
            "history": [
                {"comicId": "c1", "lastReadPage": 2, "lastReadAt": "2025-06-01T00:00:00", "progress": 40},
            ],
        })

        user = UserSession(store).current_user
        entry = user.get_entry("c1")
        assert entry.absolute_position == 2
        assert entry.progress_percentage == 40
        assert user.get_entry("missing") is None


class TestPersonaRepository:
    """Tests for persona persistence."""

    def test_load_without_onboarding(self, store):
        assert PersonaRepository(store).load() is None

    def test_round_trip_uses_stored_keys(self, store):
        answers = PersonaAnswers(
            story_ending_preference="Bittersweet",
            hope_or_honesty="Brutal Honesty",
            vibes=["Tragic & Cathartic", "Dark & Brooding", "Epic & Grandiose"],
        )
        PersonaRepository(store).save(answers, PersonaLabel.MELANCHOLIC_REALIST)

        raw = store.get(PERSONA_KEY)
        assert raw["storyEndingPreference"] == "Bittersweet"
        assert raw["personaType"] == "The Melancholic Realist"

        loaded_answers, label = PersonaRepository(store).load()
        assert loaded_answers == answers
        assert label == PersonaLabel.MELANCHOLIC_REALIST

    def test_unknown_persona_type(self, store):
        store.set(PERSONA_KEY, {"storyEndingPreference": "Love wins", "personaType": "The Space Cowboy"})

        answers, label = PersonaRepository(store).load()
        assert answers.story_ending_preference == "Love wins"
        assert label is None

    def test_clear_resets_onboarding(self, store):
        repository = PersonaRepository(store)
        repository.save(PersonaAnswers(story_ending_preference="Love wins"), PersonaLabel.ROMANTIC_OPTIMIST)

        repository.clear()

        assert store.get(PERSONA_KEY) is None
        assert repository.load() is None

    def test_user_model_round_trip(self):
        user = User(id="U1", favorites=["a"])
        assert User.from_dict(user.to_dict()) == user
