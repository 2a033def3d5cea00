"""Pydantic value shapes and domain types."""

from roster.schemas.account import (
    Account,
    AccountPage,
    AccountUpdate,
    AccountUpdateInput,
    Profile,
    ProfileInput,
    SignupInput,
    normalize_email,
)
from roster.schemas.directory import (
    DEFAULT_PAGE_NUM,
    DEFAULT_PER_PAGE,
    MAX_PER_PAGE,
    DirectoryFilter,
    build_filter,
    parse_filter,
)
from roster.schemas.health import HealthResponse
from roster.schemas.role import Role, is_privileged, parse_role

__all__ = [
    "Account",
    "AccountPage",
    "AccountUpdate",
    "AccountUpdateInput",
    "DEFAULT_PAGE_NUM",
    "DEFAULT_PER_PAGE",
    "DirectoryFilter",
    "HealthResponse",
    "MAX_PER_PAGE",
    "Profile",
    "ProfileInput",
    "Role",
    "SignupInput",
    "build_filter",
    "is_privileged",
    "normalize_email",
    "parse_filter",
    "parse_role",
]
