"""Domain entity representing a user."""

from dataclasses import dataclass
from datetime import datetime

ROLE_USER = "user"
ROLE_ADMIN = "admin"


@dataclass
class User:
    """Core attributes describing a hub account."""

    id: int | None
    username: str
    email: str
    password: str
    role: str = ROLE_USER
    is_active: bool = True
    created_at: datetime | None = None

    def has_role(self, role: str) -> bool:
        """Return ``True`` when the user's role matches ``role``."""

        return self.role.lower() == role.lower()

    def is_admin(self) -> bool:
        """Return ``True`` when the user is an administrator."""

        return self.has_role(ROLE_ADMIN)
