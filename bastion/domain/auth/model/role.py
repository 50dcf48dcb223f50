"""Role hierarchy for authorization."""

from enum import IntEnum


class Role(IntEnum):
    """Ranked roles. The value is the role's level; higher outranks lower.

    Levels are strictly decreasing down the list and never shared. Gaps allow
    future role insertion without renumbering.
    """

    SUPER_ADMIN = 100
    ADMIN = 50
    STAFF = 20
    CONTENT_EDITOR = 15
    VIEWER = 10

    @property
    def level(self) -> int:
        return int(self)

    @classmethod
    def top(cls) -> "Role":
        """The highest-ranked role, exempt from rank checks."""
        return max(cls)

    @classmethod
    def parse(cls, value: str) -> "Role":
        """Look up a role by name, case-insensitively (``"super_admin"`` -> SUPER_ADMIN).

        Raises ValueError for unknown names.
        """
        try:
            return cls[value.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown role: {value}") from None
