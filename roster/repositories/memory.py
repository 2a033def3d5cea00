"""In-memory account repository used as a test double and for local experiments."""

import threading
import uuid
from datetime import datetime, timezone
from uuid import UUID

from roster.core.errors import EntryAlreadyExists, EntryNotFound
from roster.repositories.base import AccountRepository
from roster.schemas.account import Account, AccountUpdate, Profile, SignupInput
from roster.schemas.directory import DirectoryFilter
from roster.services.credentials import CredentialHasher


def _matches(account: Account, directory_filter: DirectoryFilter) -> bool:
    """Role AND case-insensitive search, same semantics as the relational backend."""
    if directory_filter.role is not None and account.role != directory_filter.role:
        return False
    if directory_filter.search:
        term = directory_filter.search.lower()
        fields = (
            account.email,
            account.profile.handle,
            account.profile.first_name,
            account.profile.last_name,
        )
        return any(value is not None and term in value.lower() for value in fields)
    return True


class InMemoryAccountRepository(AccountRepository):
    """Dict-backed repository; a lock stands in for the database transaction."""

    def __init__(self, hasher: CredentialHasher, accounts: list[Account] | None = None) -> None:
        self._hasher = hasher
        self._lock = threading.Lock()
        self._accounts: dict[UUID, Account] = {a.id: a for a in accounts or []}

    def _ensure_unique(self, email: str, handle: str | None, exclude: UUID | None = None) -> None:
        for other in self._accounts.values():
            if other.id == exclude:
                continue
            if other.email == email:
                raise EntryAlreadyExists()
            if handle is not None and other.profile.handle == handle:
                raise EntryAlreadyExists()

    def create(self, signup: SignupInput) -> Account:
        credential_hash = self._hasher.hash(signup.password)
        now = datetime.now(timezone.utc)
        account = Account(
            id=uuid.uuid4(),
            email=signup.email,
            credential_hash=credential_hash,
            role=signup.role,
            profile=Profile(),
            created_at=now,
            updated_at=now,
        )
        with self._lock:
            self._ensure_unique(account.email, None)
            self._accounts[account.id] = account
        return account

    def get(self, account_id: UUID) -> Account:
        with self._lock:
            account = self._accounts.get(account_id)
        if account is None:
            raise EntryNotFound()
        return account

    def find_by_email(self, email: str) -> Account:
        with self._lock:
            for account in self._accounts.values():
                if account.email == email:
                    return account
        raise EntryNotFound()

    def _filtered(self, directory_filter: DirectoryFilter) -> list[Account]:
        with self._lock:
            matching = [a for a in self._accounts.values() if _matches(a, directory_filter)]
        return sorted(matching, key=lambda a: a.created_at, reverse=True)

    def list(self, directory_filter: DirectoryFilter) -> list[Account]:
        if directory_filter.beyond_storage:
            return []
        matching = self._filtered(directory_filter)
        start = directory_filter.offset
        return matching[start : start + directory_filter.per_page]

    def total(self, directory_filter: DirectoryFilter) -> int:
        return len(self._filtered(directory_filter))

    def update(self, account_id: UUID, changes: AccountUpdate) -> Account:
        with self._lock:
            current = self._accounts.get(account_id)
            if current is None:
                raise EntryNotFound()
            self._ensure_unique(changes.email, changes.profile.handle, exclude=account_id)
            updated = current.model_copy(
                update={
                    "email": changes.email,
                    "role": changes.role,
                    "profile": changes.profile.model_copy(),
                    "updated_at": datetime.now(timezone.utc),
                }
            )
            self._accounts[account_id] = updated
        return updated

    def delete(self, account_id: UUID) -> Account:
        with self._lock:
            account = self._accounts.pop(account_id, None)
        if account is None:
            raise EntryNotFound()
        return account

    def verify_credential(self, email: str, password: str) -> bool:
        account = self.find_by_email(email)
        return self._hasher.verify(account.credential_hash, password)
