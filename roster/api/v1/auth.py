"""Sign-up/sign-in endpoints and the authentication gate (get_current_account)."""

import logging
from functools import lru_cache
from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from roster.core.config import settings
from roster.core.database import SessionLocal
from roster.core.errors import EntryNotFound, InvalidInput, Unauthorized
from roster.core.security import TokenIssuer
from roster.repositories import SqlAlchemyAccountRepository
from roster.schemas.account import Account, AccountOut
from roster.schemas.auth import SigninRequest, SignupRequest, TokenResponse
from roster.services.accounts import AccountService
from roster.services.credentials import build_hasher

logger = logging.getLogger(__name__)

router = APIRouter()
security = HTTPBearer(auto_error=False)


@lru_cache
def get_account_service() -> AccountService:
    """Process-wide service over the pooled relational repository."""
    repository = SqlAlchemyAccountRepository(SessionLocal, build_hasher(settings))
    return AccountService(repository, registration_policy=settings.REGISTRATION_POLICY)


@lru_cache
def get_token_issuer() -> TokenIssuer:
    return TokenIssuer.from_settings(settings)


def get_current_account(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    service: Annotated[AccountService, Depends(get_account_service)],
    issuer: Annotated[TokenIssuer, Depends(get_token_issuer)],
) -> Account:
    """
    Dependency: resolve the bearer token (Authorization header, else session cookie)
    to an Account. Raises Unauthorized before any handler runs when the token is
    missing, invalid, expired, or names an account that no longer exists.
    """
    token = credentials.credentials if credentials is not None else None
    if not token:
        token = request.cookies.get(settings.AUTH_COOKIE_NAME)
    if not token:
        raise Unauthorized("Not authenticated")
    claims = issuer.verify(token)
    try:
        return service.resolve_subject(claims.sub)
    except (EntryNotFound, InvalidInput) as e:
        logger.info("Session token names an unknown account: sub=%s", claims.sub)
        raise Unauthorized("Invalid token") from e


@router.post("/signup", response_model=AccountOut, status_code=status.HTTP_201_CREATED)
def signup(
    body: SignupRequest,
    service: Annotated[AccountService, Depends(get_account_service)],
) -> Account:
    """Self-registration. New accounts are always Guest; privileged users re-role them afterwards."""
    return service.signup(body.email, body.password)


@router.post("/signin", response_model=TokenResponse)
def signin(
    body: SigninRequest,
    response: Response,
    service: Annotated[AccountService, Depends(get_account_service)],
    issuer: Annotated[TokenIssuer, Depends(get_token_issuer)],
) -> TokenResponse:
    """
    Authenticate with email and password; returns a JWT access token and also sets
    it as an HttpOnly cookie. Send it back as: Authorization: Bearer <access_token>
    """
    account = service.signin(body.email, body.password)
    token = issuer.issue(account.id)
    max_age = issuer.lifetime_minutes * 60
    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value=token,
        max_age=max_age,
        path="/",
        httponly=True,
        samesite="lax",
        secure=settings.APP_ENV == "prod",
    )
    return TokenResponse(
        access_token=token,
        token_type="bearer",
        expires_in=max_age,
        account=AccountOut.model_validate(account),
    )


@router.post("/logout")
def logout(response: Response) -> dict[str, str]:
    """Clear the session cookie. Bearer tokens simply expire."""
    response.delete_cookie(key=settings.AUTH_COOKIE_NAME, path="/")
    return {"status": "success"}
