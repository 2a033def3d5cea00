"""SQLAlchemy implementation of the account repository (accounts + profiles tables)."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from uuid import UUID

from sqlalchemy import Select, func, or_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from roster.core.errors import EntryAlreadyExists, EntryNotFound, StorageFailure
from roster.models import AccountRecord, ProfileRecord
from roster.models.account import utcnow
from roster.repositories.base import AccountRepository
from roster.schemas.account import Account, AccountUpdate, Profile, SignupInput
from roster.schemas.directory import DirectoryFilter
from roster.schemas.role import Role
from roster.services.credentials import CredentialHasher

logger = logging.getLogger(__name__)

PROFILE_FIELDS = ("first_name", "middle_name", "last_name", "handle", "avatar_url", "bio")

# Escape character for LIKE patterns so user-supplied % and _ match literally.
LIKE_ESCAPE = "\\"


def _like_pattern(term: str) -> str:
    escaped = (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"


def _to_account(record: AccountRecord) -> Account:
    """Reconstruct the domain Account from an account row and its profile row."""
    profile = Profile.model_validate(record.profile) if record.profile is not None else Profile()
    return Account(
        id=record.id,
        email=record.email,
        credential_hash=record.password_hash,
        role=Role(record.role),
        profile=profile,
        created_at=record.created_at,
        updated_at=record.updated_at,
    )


@contextmanager
def _storage_errors(operation: str) -> Iterator[None]:
    """Classify SQLAlchemy faults; callers above the repository never see them."""
    try:
        yield
    except IntegrityError as e:
        logger.info("%s rejected by a unique constraint", operation)
        raise EntryAlreadyExists() from e
    except SQLAlchemyError as e:
        logger.exception("%s failed in the storage backend", operation)
        raise StorageFailure(f"{operation} failed: {type(e).__name__}") from e


class SqlAlchemyAccountRepository(AccountRepository):
    """
    Relational repository. Every operation runs in its own session and transaction
    (session.begin()), so a failure at any step rolls back the whole operation.
    """

    def __init__(self, session_factory: sessionmaker[Session], hasher: CredentialHasher) -> None:
        self._session_factory = session_factory
        self._hasher = hasher

    @contextmanager
    def _transaction(self, operation: str) -> Iterator[Session]:
        with _storage_errors(operation):
            with self._session_factory() as session, session.begin():
                yield session

    @staticmethod
    def _new_profile(account_id: UUID) -> ProfileRecord:
        now = utcnow()
        return ProfileRecord(account_id=account_id, created_at=now, updated_at=now)

    @staticmethod
    def _load(session: Session, account_id: UUID) -> AccountRecord:
        record = session.get(AccountRecord, account_id)
        if record is None:
            raise EntryNotFound()
        return record

    @staticmethod
    def _apply_filter(stmt: Select, directory_filter: DirectoryFilter) -> Select:
        if directory_filter.role is not None:
            stmt = stmt.where(AccountRecord.role == directory_filter.role.value)
        if directory_filter.search:
            pattern = _like_pattern(directory_filter.search)
            stmt = stmt.where(
                or_(
                    AccountRecord.email.ilike(pattern, escape=LIKE_ESCAPE),
                    ProfileRecord.handle.ilike(pattern, escape=LIKE_ESCAPE),
                    ProfileRecord.first_name.ilike(pattern, escape=LIKE_ESCAPE),
                    ProfileRecord.last_name.ilike(pattern, escape=LIKE_ESCAPE),
                )
            )
        return stmt

    def create(self, signup: SignupInput) -> Account:
        password_hash = self._hasher.hash(signup.password)
        with self._transaction("create account") as session:
            now = utcnow()
            record = AccountRecord(
                email=signup.email,
                password_hash=password_hash,
                role=signup.role.value,
                created_at=now,
                updated_at=now,
            )
            session.add(record)
            session.flush()
            session.add(self._new_profile(record.id))
            session.flush()
            session.refresh(record)
            account = _to_account(record)
        logger.info("Created account id=%s role=%s", account.id, account.role.value)
        return account

    def get(self, account_id: UUID) -> Account:
        with self._transaction("get account") as session:
            return _to_account(self._load(session, account_id))

    def find_by_email(self, email: str) -> Account:
        with self._transaction("find account by email") as session:
            record = session.scalars(
                select(AccountRecord).where(AccountRecord.email == email)
            ).first()
            if record is None:
                raise EntryNotFound()
            return _to_account(record)

    def list(self, directory_filter: DirectoryFilter) -> list[Account]:
        if directory_filter.beyond_storage:
            return []
        stmt = select(AccountRecord).outerjoin(
            ProfileRecord, ProfileRecord.account_id == AccountRecord.id
        )
        stmt = (
            self._apply_filter(stmt, directory_filter)
            .order_by(AccountRecord.created_at.desc(), AccountRecord.id)
            .limit(directory_filter.per_page)
            .offset(directory_filter.offset)
        )
        with self._transaction("list accounts") as session:
            return [_to_account(r) for r in session.scalars(stmt).unique()]

    def total(self, directory_filter: DirectoryFilter) -> int:
        stmt = (
            select(func.count(AccountRecord.id))
            .select_from(AccountRecord)
            .outerjoin(ProfileRecord, ProfileRecord.account_id == AccountRecord.id)
        )
        stmt = self._apply_filter(stmt, directory_filter)
        with self._transaction("count accounts") as session:
            return session.scalar(stmt) or 0

    def update(self, account_id: UUID, changes: AccountUpdate) -> Account:
        with self._transaction("update account") as session:
            record = self._load(session, account_id)
            now = utcnow()
            record.email = changes.email
            record.role = changes.role.value
            record.updated_at = now
            profile = record.profile
            if profile is None:
                profile = self._new_profile(record.id)
                record.profile = profile
            for field in PROFILE_FIELDS:
                setattr(profile, field, getattr(changes.profile, field))
            profile.updated_at = now
            session.flush()
            session.refresh(record)
            account = _to_account(record)
        logger.info("Updated account id=%s", account_id)
        return account

    def delete(self, account_id: UUID) -> Account:
        with self._transaction("delete account") as session:
            record = self._load(session, account_id)
            account = _to_account(record)
            # delete-orphan cascade issues the profile DELETE before the account DELETE
            session.delete(record)
            session.flush()
        logger.info("Deleted account id=%s", account_id)
        return account

    def verify_credential(self, email: str, password: str) -> bool:
        account = self.find_by_email(email)
        return self._hasher.verify(account.credential_hash, password)
