"""Error taxonomy shared by the repository, service and transport layers."""


class RosterError(Exception):
    """Base class for every error kind surfaced by the account engine."""

    code = "error"
    default_message = "Account operation failed."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class EntryNotFound(RosterError):
    code = "entry_not_found"
    default_message = "Entry not found."


class EntryAlreadyExists(RosterError):
    code = "entry_already_exists"
    default_message = "Entry already exists."


class InvalidInput(RosterError):
    """Malformed identifier or request shape."""

    code = "invalid_input"
    default_message = "Invalid input."


class InvalidCredentials(RosterError):
    code = "invalid_credentials"
    default_message = "Invalid email or password."


class InvalidRole(RosterError):
    code = "invalid_role"
    default_message = "Invalid role."

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"Invalid role: {value!r}.")


class ValidationFailed(RosterError):
    """Aggregated rule violations; ``errors`` lists every unmet rule."""

    code = "validation_failed"
    default_message = "Validation failed."

    def __init__(self, errors: list[str], message: str | None = None) -> None:
        self.errors = list(errors)
        super().__init__(message or f"Validation failed: {'; '.join(self.errors)}")


class CryptoFailure(RosterError):
    code = "crypto_failure"
    default_message = "Credential hashing failed."


class AccessDenied(RosterError):
    code = "access_denied"
    default_message = "Access denied."


class BuilderFailed(RosterError):
    code = "builder_failed"
    default_message = "Could not build directory filter."


class StorageFailure(RosterError):
    """Wraps any connection, pool or transaction fault of the relational store."""

    code = "storage_failure"
    default_message = "Storage backend failure."


class Unauthorized(RosterError):
    code = "unauthorized"
    default_message = "Invalid or expired token."
