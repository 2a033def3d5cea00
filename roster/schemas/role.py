"""Role hierarchy: Owner > Admin > Employee > Guest."""

from enum import Enum

from roster.core.errors import InvalidRole


class Role(str, Enum):
    """Account role. Declaration order is the rank order, highest first."""

    OWNER = "Owner"
    ADMIN = "Admin"
    EMPLOYEE = "Employee"
    GUEST = "Guest"

    @property
    def rank(self) -> int:
        """Higher is more privileged (Owner=3 ... Guest=0)."""
        return len(ROLES) - 1 - ROLES.index(self)

    @property
    def display_name(self) -> str:
        """Localized label shown by the chat-bot and web front-ends."""
        return DISPLAY_NAMES[self]

    def outranks(self, other: "Role") -> bool:
        return self.rank > other.rank

    def __str__(self) -> str:
        return self.value


ROLES: tuple[Role, ...] = (Role.OWNER, Role.ADMIN, Role.EMPLOYEE, Role.GUEST)

# Least-privileged role, used whenever a role is missing or unparsable.
DEFAULT_ROLE = Role.GUEST

PRIVILEGED_ROLES: frozenset[Role] = frozenset({Role.OWNER, Role.ADMIN})

DISPLAY_NAMES: dict[Role, str] = {
    Role.OWNER: "Владелец",
    Role.ADMIN: "Администратор",
    Role.EMPLOYEE: "Сотрудник",
    Role.GUEST: "Гость",
}

_ALIASES: dict[str, Role] = {}
for _role in ROLES:
    _ALIASES[_role.value.lower()] = _role
    _ALIASES[DISPLAY_NAMES[_role].lower()] = _role


def is_privileged(role: Role) -> bool:
    """True for Owner and Admin."""
    return role in PRIVILEGED_ROLES


def parse_role(value: str | Role) -> Role:
    """
    Parse a role from its English or localized name (case-insensitive).
    Raises InvalidRole for anything else, including the empty string.
    """
    if isinstance(value, Role):
        return value
    if not isinstance(value, str):
        raise InvalidRole(repr(value))
    role = _ALIASES.get(value.strip().lower())
    if role is None:
        raise InvalidRole(value)
    return role


def parse_role_or_none(value: str | None) -> Role | None:
    """Lenient variant for filters: None or unparsable input means "no role"."""
    if value is None:
        return None
    try:
        return parse_role(value)
    except InvalidRole:
        return None
