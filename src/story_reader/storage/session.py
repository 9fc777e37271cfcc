"""Session and persona persistence on top of a key-value store."""

from typing import Optional

from ..models.history import HistoryEntry, User
from ..models.persona import PersonaAnswers, PersonaLabel
from ..observability import logger
from .kv_store import KeyValueStore, PERSONA_KEY, USER_KEY


class UserSession:
    """
    The current user, as persisted under the "user" key.

    Provides `current_user` (None when signed out) and `persist_history`, the two
    things progress tracking needs from the session.
    """

    def __init__(self, store: KeyValueStore):
        self.store = store
        self._user: Optional[User] = None
        self._load()

    def _load(self):
        data = self.store.get(USER_KEY)
        self._user = User.from_dict(data) if data else None

    @property
    def current_user(self) -> Optional[User]:
        return self._user

    def login(self, user: User):
        """Set the signed-in user and persist it."""
        self._user = user
        self.store.set(USER_KEY, user.to_dict())
        logger.info(f"User signed in: {user.id}")

    def logout(self):
        """Clear the signed-in user."""
        if self._user:
            logger.info(f"User signed out: {self._user.id}")
        self._user = None
        self.store.delete(USER_KEY)

    def update_user(self, **changes) -> Optional[User]:
        """Apply field changes to the signed-in user. No-op when signed out."""
        if self._user is None:
            return None
        for name, value in changes.items():
            if not hasattr(self._user, name):
                raise AttributeError(f"User has no field {name!r}")
            setattr(self._user, name, value)
        self.store.set(USER_KEY, self._user.to_dict())
        return self._user

    def persist_history(self, entries: list[HistoryEntry]):
        """Replace the signed-in user's history ledger."""
        self.update_user(history=list(entries))


class PersonaRepository:
    """Stores the finished onboarding answers and label under "userPersona"."""

    def __init__(self, store: KeyValueStore):
        self.store = store

    def save(self, answers: PersonaAnswers, label: PersonaLabel):
        data = answers.to_dict()
        data["personaType"] = label.value
        self.store.set(PERSONA_KEY, data)

    def load(self) -> Optional[tuple[PersonaAnswers, Optional[PersonaLabel]]]:
        """
        Load the saved persona.

        Returns None when onboarding was never completed. The label is None if the
        stored personaType is missing or unknown.
        """
        data = self.store.get(PERSONA_KEY)
        if not data:
            return None

        label = None
        persona_type = data.get("personaType")
        if persona_type:
            try:
                label = PersonaLabel(persona_type)
            except ValueError:
                logger.warning(f"Ignoring unknown persona type: {persona_type}")
        return PersonaAnswers.from_dict(data), label

    def clear(self):
        self.store.delete(PERSONA_KEY)
