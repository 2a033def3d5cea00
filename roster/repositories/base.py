"""Account repository port. The service depends only on this contract."""

from abc import ABC, abstractmethod
from uuid import UUID

from roster.schemas.account import Account, AccountUpdate, SignupInput
from roster.schemas.directory import DirectoryFilter


class AccountRepository(ABC):
    """
    Persistence contract for accounts and their profiles.

    Implementations raise EntryNotFound / EntryAlreadyExists / StorageFailure and
    never leak backend-specific exceptions. Operations touching both the account
    and the profile are atomic.
    """

    @abstractmethod
    def create(self, signup: SignupInput) -> Account:
        """Hash the password and insert account + empty profile atomically."""

    @abstractmethod
    def get(self, account_id: UUID) -> Account: ...

    @abstractmethod
    def find_by_email(self, email: str) -> Account:
        """Lookup by already-normalized email."""

    @abstractmethod
    def list(self, directory_filter: DirectoryFilter) -> list[Account]:
        """Role AND search conditions, newest first, one page."""

    @abstractmethod
    def total(self, directory_filter: DirectoryFilter) -> int:
        """Count under the same conditions as list, ignoring pagination."""

    @abstractmethod
    def update(self, account_id: UUID, changes: AccountUpdate) -> Account:
        """Replace email, role and every profile field atomically."""

    @abstractmethod
    def delete(self, account_id: UUID) -> Account:
        """Remove profile and account atomically; return the last known state."""

    @abstractmethod
    def verify_credential(self, email: str, password: str) -> bool:
        """Propagates EntryNotFound for an unknown email."""
