"""Session token issuance and verification (signed, time-bounded JWT claims)."""

from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import UUID

import jwt
from pydantic import BaseModel, Field

from roster.core.config import Settings
from roster.core.errors import Unauthorized


class SessionClaims(BaseModel):
    """Ephemeral assertion: who (sub) and for which window (iat..exp)."""

    sub: str = Field(..., description="Account id")
    iat: datetime
    exp: datetime


def _as_utc(moment: datetime) -> datetime:
    return moment.replace(tzinfo=UTC) if moment.tzinfo is None else moment.astimezone(UTC)


class TokenIssuer:
    """Mints and validates bearer tokens with a server-held secret."""

    def __init__(self, secret: str, algorithm: str = "HS256", lifetime_minutes: int = 60) -> None:
        if not secret:
            raise ValueError("Token secret must be non-empty")
        self._secret = secret
        self._algorithm = algorithm
        self.lifetime_minutes = lifetime_minutes

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenIssuer":
        return cls(
            secret=settings.JWT_SECRET.get_secret_value(),
            algorithm=settings.JWT_ALGORITHM,
            lifetime_minutes=settings.JWT_EXPIRE_MINUTES,
        )

    def issue(
        self,
        account_id: UUID | str,
        now: datetime | None = None,
        lifetime_minutes: int | None = None,
    ) -> str:
        """Sign claims {sub, iat=now, exp=now+lifetime} and return the token string."""
        issued_at = _as_utc(now) if now is not None else datetime.now(UTC)
        lifetime = lifetime_minutes if lifetime_minutes is not None else self.lifetime_minutes
        payload: dict[str, Any] = {
            "sub": str(account_id),
            "iat": issued_at,
            "exp": issued_at + timedelta(minutes=lifetime),
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str, now: datetime | None = None) -> SessionClaims:
        """
        Validate signature and expiry. Raises Unauthorized on a bad signature,
        a malformed token, missing claims, or now > exp.
        """
        try:
            # Expiry is checked below against `now` so callers can pin the clock.
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["sub", "iat", "exp"], "verify_exp": False, "verify_iat": False},
            )
        except jwt.PyJWTError as e:
            raise Unauthorized() from e
        try:
            claims = SessionClaims(
                sub=str(payload["sub"]),
                iat=datetime.fromtimestamp(int(payload["iat"]), UTC),
                exp=datetime.fromtimestamp(int(payload["exp"]), UTC),
            )
        except (KeyError, TypeError, ValueError, OverflowError) as e:
            raise Unauthorized("Invalid token payload") from e
        current = _as_utc(now) if now is not None else datetime.now(UTC)
        if current > claims.exp:
            raise Unauthorized("Token expired")
        if not claims.sub:
            raise Unauthorized("Invalid token payload")
        return claims

