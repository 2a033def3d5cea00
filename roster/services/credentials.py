"""Password hashing/verification and the password acceptance policy."""

from typing import TYPE_CHECKING, Protocol

import bcrypt
from argon2 import PasswordHasher
from argon2.exceptions import (
    HashingError,
    InvalidHashError,
    VerificationError,
    VerifyMismatchError,
)

from roster.core.errors import CryptoFailure, ValidationFailed

if TYPE_CHECKING:
    from roster.core.config import Settings

PASSWORD_MIN_LEN = 8
PASSWORD_MAX_LEN = 64

ARGON2_PREFIX = "$argon2"

SPECIAL_CHARACTERS = frozenset("!@#$%^&*()_-+=<>?/{}~|[]\"\\'`")

COMMON_PASSWORDS = frozenset(
    {
        "password",
        "12345678",
        "qwerty",
        "admin123",
        "letmein",
        "welcome",
        "monkey",
        "sunshine",
        "password1",
        "123123",
        "11111111",
        "abcd1234",
        "trustno1",
        "dragon",
        "baseball",
    }
)


class CredentialHasher(Protocol):
    """Injected password hasher; output must self-describe algorithm, salt and parameters."""

    def hash(self, password: str) -> str: ...

    def verify(self, hashed: str, password: str) -> bool: ...


class Argon2CredentialHasher:
    """
    Memory-hard Argon2id hashing with a fresh random salt per call (PHC string output).

    New hashes are always Argon2id. Stored hashes in another format are handed to
    `legacy` for verification only; without it they raise CryptoFailure.
    """

    def __init__(
        self,
        time_cost: int = 3,
        memory_cost: int = 65536,
        parallelism: int = 4,
        legacy: CredentialHasher | None = None,
    ) -> None:
        self._legacy = legacy
        self._hasher = PasswordHasher(
            time_cost=time_cost,
            memory_cost=memory_cost,
            parallelism=parallelism,
        )

    def hash(self, password: str) -> str:
        try:
            return self._hasher.hash(password)
        except HashingError as e:
            raise CryptoFailure(f"Argon2 hashing failed: {e}") from e

    def verify(self, hashed: str, password: str) -> bool:
        if self._legacy is not None and not hashed.startswith(ARGON2_PREFIX):
            return self._legacy.verify(hashed, password)
        try:
            return self._hasher.verify(hashed, password)
        except VerifyMismatchError:
            return False
        except InvalidHashError as e:
            raise CryptoFailure("Stored credential hash is malformed.") from e
        except VerificationError:
            return False


class BcryptCredentialHasher:
    """
    bcrypt, kept to verify hashes written before Argon2id became the only scheme.
    Passwords are at most 64 chars; the 72-byte cut only affects multibyte input.
    """

    def __init__(self, rounds: int = 12) -> None:
        self._rounds = rounds

    def hash(self, password: str) -> str:
        pw_bytes = password.encode("utf-8")[:72]
        try:
            return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=self._rounds)).decode("utf-8")
        except (ValueError, TypeError) as e:
            raise CryptoFailure(f"bcrypt hashing failed: {e}") from e

    def verify(self, hashed: str, password: str) -> bool:
        pw_bytes = password.encode("utf-8")[:72]
        try:
            return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
        except (ValueError, TypeError) as e:
            raise CryptoFailure("Stored credential hash is malformed.") from e


def build_hasher(settings: "Settings") -> CredentialHasher:
    """Argon2id from settings; bcrypt hashes already in storage still verify."""
    return Argon2CredentialHasher(
        time_cost=settings.ARGON2_TIME_COST,
        memory_cost=settings.ARGON2_MEMORY_COST_KIB,
        parallelism=settings.ARGON2_PARALLELISM,
        legacy=BcryptCredentialHasher(),
    )


def password_violations(password: str) -> list[str]:
    """Return every unmet password rule (empty list when the password is acceptable)."""
    errors: list[str] = []
    if not (PASSWORD_MIN_LEN <= len(password) <= PASSWORD_MAX_LEN):
        errors.append(
            f"Password must be between {PASSWORD_MIN_LEN} and {PASSWORD_MAX_LEN} characters."
        )
    if any(c.isspace() for c in password):
        errors.append("Password must not contain whitespace.")
    if password.lower() in COMMON_PASSWORDS:
        errors.append("Password is too common.")
    if not any(c.isascii() and c.isdigit() for c in password):
        errors.append("Password must contain at least one digit.")
    if not any(c.isascii() and c.isupper() for c in password):
        errors.append("Password must contain at least one uppercase letter.")
    if not any(c.isascii() and c.islower() for c in password):
        errors.append("Password must contain at least one lowercase letter.")
    if not any(c in SPECIAL_CHARACTERS for c in password):
        errors.append("Password must contain at least one special character.")
    return errors


def check_password_policy(password: str) -> None:
    """Raise ValidationFailed listing all violations."""
    errors = password_violations(password)
    if errors:
        raise ValidationFailed(errors, message="Password does not meet requirements.")
