"""Per-user "notifications cleared" flag."""

from __future__ import annotations

from .storage import KeyValueStorage

FLAG_KEY_PREFIX = "notifications_cleared_"
FLAG_VALUE = "true"
BOUNDARY_KEY_SUFFIX = "_through"


class DismissalFlag:
    """Records that a user cleared their list and up to which notification id.

    Notifications with an id at or below the stored boundary were on screen
    when the list was cleared; anything above it arrived afterwards.
    """

    def __init__(self, storage: KeyValueStorage) -> None:
        self._storage = storage

    @staticmethod
    def key(user_id: int) -> str:
        return f"{FLAG_KEY_PREFIX}{user_id}"

    @classmethod
    def boundary_key(cls, user_id: int) -> str:
        return f"{cls.key(user_id)}{BOUNDARY_KEY_SUFFIX}"

    def is_set(self, user_id: int) -> bool:
        return self._storage.get(self.key(user_id)) == FLAG_VALUE

    def dismissed_through(self, user_id: int) -> int:
        """Highest notification id covered by the dismissal, 0 when unknown."""

        raw = self._storage.get(self.boundary_key(user_id))
        try:
            return max(0, int(raw))
        except (TypeError, ValueError):
            return 0

    def set(self, user_id: int, through_id: int | None = None) -> None:
        self._storage.set(self.key(user_id), FLAG_VALUE)
        if through_id is not None:
            self._storage.set(self.boundary_key(user_id), str(through_id))

    def clear(self, user_id: int) -> None:
        self._storage.remove(self.key(user_id))
        self._storage.remove(self.boundary_key(user_id))


__all__ = ["DismissalFlag", "FLAG_KEY_PREFIX", "FLAG_VALUE", "BOUNDARY_KEY_SUFFIX"]
