"""Domain entity representing the authenticated caller."""

from dataclasses import dataclass

ADMIN_ROLE = "admin"


@dataclass(frozen=True)
class User:
    """Identity supplied by the platform's identity service."""

    id: str
    role: str = "member"
    name: str | None = None

    def has_role(self, alias: str) -> bool:
        """Return ``True`` when the user's role matches ``alias``."""

        return self.role.lower() == alias.lower()

    def is_admin(self) -> bool:
        """Return ``True`` when the user is an administrator."""

        return self.has_role(ADMIN_ROLE)


__all__ = ["ADMIN_ROLE", "User"]
