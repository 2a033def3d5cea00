"""Account directory endpoints. Authorization rules live in AccountService."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from roster.api.v1.auth import get_account_service, get_current_account
from roster.schemas.account import Account, AccountOut, AccountPageOut, AccountUpdateInput
from roster.services.accounts import AccountService

router = APIRouter()

CurrentAccount = Annotated[Account, Depends(get_current_account)]
Service = Annotated[AccountService, Depends(get_account_service)]


@router.get("", response_model=AccountPageOut)
def list_accounts(
    current: CurrentAccount,
    service: Service,
    page: Annotated[str | None, Query()] = None,
    per_page: Annotated[str | None, Query()] = None,
    role: Annotated[str | None, Query()] = None,
    q: Annotated[str | None, Query(description="Search email, handle, first or last name")] = None,
) -> AccountPageOut:
    """
    List the directory (privileged only), newest first.
    Unparsable page/per_page fall back to defaults; per_page is clamped to 1..100.
    """
    result = service.list(current, page=page, per_page=per_page, role=role, search=q)
    return AccountPageOut.from_page(result)


@router.get("/me", response_model=AccountOut)
def get_me(current: CurrentAccount) -> Account:
    return current


@router.get("/{account_id}", response_model=AccountOut)
def get_account(account_id: str, current: CurrentAccount, service: Service) -> Account:
    return service.get_by_id(current, account_id)


@router.put("/{account_id}", response_model=AccountOut)
def update_account(
    account_id: str,
    body: AccountUpdateInput,
    current: CurrentAccount,
    service: Service,
) -> Account:
    """Update email, role and profile. Omitted fields are left unchanged."""
    return service.update(current, account_id, body)


@router.delete("/{account_id}", response_model=AccountOut)
def delete_account(account_id: str, current: CurrentAccount, service: Service) -> Account:
    """Delete an account (privileged, or the account itself); returns its last state."""
    return service.delete(current, account_id)
