"""Account repository port and its implementations."""

from roster.repositories.base import AccountRepository
from roster.repositories.memory import InMemoryAccountRepository
from roster.repositories.relational import SqlAlchemyAccountRepository

__all__ = ["AccountRepository", "InMemoryAccountRepository", "SqlAlchemyAccountRepository"]
