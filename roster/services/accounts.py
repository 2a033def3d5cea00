"""
Account service: validation, authorization and registration policy on top of
the repository port. Front-ends pass primitive/string inputs only.
"""

import logging
from typing import Literal
from uuid import UUID

from pydantic import ValidationError

from roster.core.errors import (
    AccessDenied,
    EntryAlreadyExists,
    EntryNotFound,
    InvalidCredentials,
    InvalidInput,
    ValidationFailed,
)
from roster.repositories.base import AccountRepository
from roster.schemas.account import (
    Account,
    AccountPage,
    AccountUpdate,
    AccountUpdateInput,
    Profile,
    SignupInput,
    normalize_email,
)
from roster.schemas.directory import DirectoryFilter, parse_filter
from roster.schemas.role import DEFAULT_ROLE, Role, is_privileged, parse_role, parse_role_or_none
from roster.services.credentials import password_violations

logger = logging.getLogger(__name__)

RegistrationPolicy = Literal["signup", "bootstrap"]

# Role granted to the first account of an empty directory under the bootstrap policy.
BOOTSTRAP_ROLE = Role.OWNER


def _validation_messages(error: ValidationError) -> list[str]:
    messages = []
    for item in error.errors():
        field = ".".join(str(part) for part in item.get("loc", ())) or "input"
        messages.append(f"{field}: {item.get('msg', 'invalid value')}")
    return messages


def parse_account_id(value: str | UUID) -> UUID:
    """Parse an account id; InvalidInput for anything that is not a UUID."""
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value).strip())
    except (TypeError, ValueError, AttributeError) as e:
        raise InvalidInput(f"Malformed account id: {value!r}") from e


def _require_privileged(actor: Account) -> None:
    if not is_privileged(actor.role):
        raise AccessDenied()


def _require_privileged_or_self(actor: Account, target_id: UUID) -> None:
    if actor.id != target_id and not is_privileged(actor.role):
        raise AccessDenied()


class AccountService:
    """
    Orchestrates the repository and the credential policy.

    The repository is injected (relational in production, in-memory in tests);
    this class never branches on which one it got. The registration policy is a
    per-instance configuration: "signup" honours the requested role (falling back
    to Guest), "bootstrap" makes the first account Owner and everyone else Guest.
    """

    def __init__(
        self,
        repository: AccountRepository,
        registration_policy: RegistrationPolicy = "signup",
    ) -> None:
        if registration_policy not in ("signup", "bootstrap"):
            raise ValueError(f"Unknown registration policy: {registration_policy!r}")
        self.repository = repository
        self.registration_policy = registration_policy

    def _signup_input(self, email: str, password: str, role: Role) -> SignupInput:
        """Validate email syntax and password policy, aggregating every violation."""
        errors = password_violations(password)
        try:
            data = SignupInput(email=email, password=password, role=role)
        except ValidationError as e:
            errors = _validation_messages(e) + errors
            data = None
        if errors or data is None:
            raise ValidationFailed(errors)
        return data

    def signup(self, email: str, password: str, role: str | None = None) -> Account:
        """
        Register an account.

        Policy "signup": unparsable or missing role falls back to Guest; a duplicate
        email raises EntryAlreadyExists.
        Policy "bootstrap": the requested role is ignored; the first account of an
        empty directory becomes Owner, later ones Guest; a known email returns the
        existing account unchanged when the password matches, and raises
        EntryAlreadyExists otherwise.
        """
        email = normalize_email(email)
        if self.registration_policy == "bootstrap":
            return self._register_bootstrap(email, password)

        requested = parse_role_or_none(role) or DEFAULT_ROLE
        data = self._signup_input(email, password, requested)
        account = self.repository.create(data)
        logger.info("Signup completed for account id=%s", account.id)
        return account

    def _register_bootstrap(self, email: str, password: str) -> Account:
        try:
            existing = self.repository.find_by_email(email)
        except EntryNotFound:
            existing = None
        if existing is not None:
            if not self.repository.verify_credential(email, password):
                raise EntryAlreadyExists()
            return existing

        directory_empty = self.repository.total(DirectoryFilter()) == 0
        role = BOOTSTRAP_ROLE if directory_empty else DEFAULT_ROLE
        data = self._signup_input(email, password, role)
        account = self.repository.create(data)
        logger.info(
            "Bootstrap registration: account id=%s granted role=%s",
            account.id,
            account.role.value,
        )
        return account

    def signin(self, email: str, password: str) -> Account:
        """Unknown email and wrong password are both InvalidCredentials."""
        email = normalize_email(email)
        try:
            verified = self.repository.verify_credential(email, password)
        except EntryNotFound:
            verified = False
        if not verified:
            logger.info("Sign-in rejected")
            raise InvalidCredentials()
        try:
            return self.repository.find_by_email(email)
        except EntryNotFound as e:
            # deleted between the two lookups
            raise InvalidCredentials() from e

    def list(
        self,
        actor: Account,
        page: str | None = None,
        per_page: str | None = None,
        role: str | None = None,
        search: str | None = None,
    ) -> AccountPage:
        """
        Privileged only. Returns the page, the total under the same filter and the
        filter actually applied. list and total are separate queries, so under
        concurrent writes they may disagree slightly.
        """
        _require_privileged(actor)
        directory_filter = parse_filter(page=page, per_page=per_page, role=role, search=search)
        accounts = self.repository.list(directory_filter)
        total = self.repository.total(directory_filter)
        return AccountPage(accounts=accounts, total=total, filter=directory_filter)

    def get_by_id(self, actor: Account, account_id: str | UUID) -> Account:
        target_id = parse_account_id(account_id)
        _require_privileged_or_self(actor, target_id)
        return self.repository.get(target_id)

    def get_by_email(self, actor: Account, email: str) -> Account:
        """Directory lookup by email; privileged callers, or the owner of that email."""
        normalized = normalize_email(email)
        if normalized != actor.email and not is_privileged(actor.role):
            raise AccessDenied()
        return self.repository.find_by_email(normalized)

    def resolve_subject(self, subject: str) -> Account:
        """Account named by verified session claims (used by the authentication gate)."""
        return self.repository.get(parse_account_id(subject))

    def update(
        self,
        actor: Account,
        account_id: str | UUID,
        changes: AccountUpdateInput,
    ) -> Account:
        """
        Privileged or self. Omitted fields keep their current values. Changing a
        role requires privilege, and nobody can grant a role above their own.
        """
        target_id = parse_account_id(account_id)
        _require_privileged_or_self(actor, target_id)
        new_role = parse_role(changes.role) if changes.role is not None else None

        current = self.repository.get(target_id)
        if new_role is not None and new_role != current.role:
            _require_privileged(actor)
            if new_role.outranks(actor.role):
                raise AccessDenied("Cannot grant a role above your own.")

        profile = (
            Profile(**changes.profile.model_dump())
            if changes.profile is not None
            else current.profile
        )
        try:
            resolved = AccountUpdate(
                email=changes.email if changes.email is not None else current.email,
                role=new_role or current.role,
                profile=profile,
            )
        except ValidationError as e:
            raise ValidationFailed(_validation_messages(e)) from e
        return self.repository.update(target_id, resolved)

    def delete(self, actor: Account, account_id: str | UUID) -> Account:
        """Deleting another account requires privilege; self-deletion is allowed."""
        target_id = parse_account_id(account_id)
        if actor.id != target_id:
            _require_privileged(actor)
        deleted = self.repository.delete(target_id)
        logger.info("Account id=%s deleted by id=%s", target_id, actor.id)
        return deleted
