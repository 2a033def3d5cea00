"""Pydantic value shapes for accounts: the domain record and the boundary inputs."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from roster.schemas.directory import DirectoryFilter
from roster.schemas.role import DEFAULT_ROLE, Role

NAME_MAX_LEN = 255


def normalize_email(email: str) -> str:
    """Trim and lower-case; every lookup and write goes through this."""
    return email.strip().lower()


def _normalize_email_value(value: object) -> object:
    return normalize_email(value) if isinstance(value, str) else value


class Profile(BaseModel):
    """Optional personal fields; every field is independently nullable."""

    model_config = ConfigDict(from_attributes=True)

    first_name: str | None = Field(default=None, max_length=NAME_MAX_LEN)
    middle_name: str | None = Field(default=None, max_length=NAME_MAX_LEN)
    last_name: str | None = Field(default=None, max_length=NAME_MAX_LEN)
    handle: str | None = Field(default=None, max_length=NAME_MAX_LEN)
    avatar_url: str | None = Field(default=None)
    bio: str | None = Field(default=None)

    @property
    def full_name(self) -> str | None:
        """"Last First [Middle]" when both names are set, else whichever is set."""
        if self.first_name and self.last_name:
            parts = [self.last_name, self.first_name]
            if self.middle_name:
                parts.append(self.middle_name)
            return " ".join(parts)
        return self.first_name or self.last_name or None

    @property
    def has_profile_data(self) -> bool:
        return any((self.first_name, self.last_name, self.handle))


class Account(BaseModel):
    """Persisted identity record. credential_hash is never serialized outward."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    credential_hash: str = Field(exclude=True, repr=False)
    role: Role
    profile: Profile = Field(default_factory=Profile)
    created_at: datetime
    updated_at: datetime


class SignupInput(BaseModel):
    """Signup shape used identically by REST, RPC and bot clients."""

    email: EmailStr
    password: str = Field(..., repr=False)
    role: Role = DEFAULT_ROLE

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email_field(cls, v: object) -> object:
        return _normalize_email_value(v)


class ProfileInput(BaseModel):
    """Profile replacement; all fields are written as given."""

    model_config = {"extra": "ignore"}

    first_name: str | None = Field(default=None, max_length=NAME_MAX_LEN)
    middle_name: str | None = Field(default=None, max_length=NAME_MAX_LEN)
    last_name: str | None = Field(default=None, max_length=NAME_MAX_LEN)
    handle: str | None = Field(default=None, max_length=NAME_MAX_LEN)
    avatar_url: str | None = None
    bio: str | None = None


class AccountUpdateInput(BaseModel):
    """Update shape at the boundary. Omitted (None) fields keep their current value."""

    model_config = {"extra": "ignore"}

    email: str | None = Field(default=None, description="New email address.")
    role: str | None = Field(default=None, description="New role name (privileged callers only).")
    profile: ProfileInput | None = Field(default=None, description="Full profile replacement.")


class AccountUpdate(BaseModel):
    """Validated, fully-resolved update handed to the repository."""

    email: EmailStr
    role: Role
    profile: Profile

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email_field(cls, v: object) -> object:
        return _normalize_email_value(v)


class AccountPage(BaseModel):
    """One directory page plus the total and the filter actually applied."""

    accounts: list[Account]
    total: int
    filter: DirectoryFilter

    @property
    def page_count(self) -> int:
        return self.filter.page_count(self.total)


class AccountOut(BaseModel):
    """Public view of an account returned by the HTTP API (no credential hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    role: Role
    profile: Profile
    created_at: datetime
    updated_at: datetime


class AccountPageOut(BaseModel):
    accounts: list[AccountOut]
    total: int
    page_count: int
    filter: DirectoryFilter

    @classmethod
    def from_page(cls, page: AccountPage) -> "AccountPageOut":
        return cls(
            accounts=[AccountOut.model_validate(a) for a in page.accounts],
            total=page.total,
            page_count=page.page_count,
            filter=page.filter,
        )
