"""Auth domain dependencies.

Bearer-token authentication for FastAPI routes, the admin role gate,
and type aliases for injecting the current account and the auth service.
"""

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from rental_api.account.models import Account
from rental_api.account.store import get_account_by_id
from rental_api.auth.exceptions import AdminRequiredError, InvalidTokenError
from rental_api.auth.service import AuthService
from rental_api.core.deps import SessionDep, SettingsDep
from rental_api.core.security import decode_session_token

security = HTTPBearer(auto_error=False)


def get_current_account(
    request: Request,
    session: SessionDep,
    settings: SettingsDep,
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(security)
    ] = None,
) -> Account:
    """Resolve the account behind an ``Authorization: Bearer <token>`` header.

    Args:
        request: FastAPI request (the account is attached to request.state)
        session: Database session
        settings: Application settings (JWT secret)
        credentials: Parsed bearer credentials, None if absent or not Bearer

    Returns:
        Account model from the database

    Raises:
        InvalidTokenError: Missing header, wrong scheme, bad signature,
            expired token, or account no longer exists.
    """
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise InvalidTokenError()

    account_id = decode_session_token(credentials.credentials, settings)

    account = get_account_by_id(session, account_id)
    if account is None:
        raise InvalidTokenError()

    request.state.account = account
    return account


# Type aliases for dependency injection
CurrentAccountDep = Annotated[Account, Depends(get_current_account)]


def require_auth(_account: CurrentAccountDep) -> None:
    """Require authentication without injecting the account.

    Use as a router-level dependency when all routes require auth:
        router = APIRouter(dependencies=[Depends(require_auth)])
    """
    pass  # Authentication already validated by CurrentAccountDep


def get_admin_account(account: CurrentAccountDep) -> Account:
    """Verify the current account has the admin role.

    Raises:
        AdminRequiredError: If the account is not an admin
    """
    if not account.is_admin:
        raise AdminRequiredError()
    return account


AdminAccountDep = Annotated[Account, Depends(get_admin_account)]


def require_admin(_account: AdminAccountDep) -> None:
    """Require admin privileges without injecting the account.

    Use as a router-level or endpoint-level dependency:
        @router.post("/", dependencies=[Depends(require_admin)])
    """
    pass  # Admin check already validated by AdminAccountDep


def get_auth_service(session: SessionDep, settings: SettingsDep) -> AuthService:
    return AuthService(session, settings)


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
