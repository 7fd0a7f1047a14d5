"""Account endpoints."""

from fastapi import APIRouter, Depends

from investsim.api.deps import get_account_service
from investsim.api.schemas import AccountCreate, AccountResponse, AccountListResponse
from investsim.services import AccountService

router = APIRouter(prefix="/accounts", tags=["accounts"])


@router.post("/", response_model=AccountResponse, status_code=201)
def sign_up(
    data: AccountCreate,
    service: AccountService = Depends(get_account_service),
) -> AccountResponse:
    """Create an account with a zero cash balance."""
    account = service.sign_up(email=data.email, full_name=data.full_name)
    return AccountResponse.model_validate(account)


@router.get("/", response_model=AccountListResponse)
def list_accounts(
    service: AccountService = Depends(get_account_service),
) -> AccountListResponse:
    """List all accounts."""
    accounts = service.list_accounts()
    return AccountListResponse(
        accounts=[AccountResponse.model_validate(a) for a in accounts],
        count=len(accounts),
    )


@router.get("/{user_id}", response_model=AccountResponse)
def get_account(
    user_id: str,
    service: AccountService = Depends(get_account_service),
) -> AccountResponse:
    """Get a single account."""
    return AccountResponse.model_validate(service.get_account(user_id))
