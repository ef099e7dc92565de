import uuid
from collections.abc import Callable

from sqladmin.authentication import AuthenticationBackend
from sqlmodel import Session
from starlette.requests import Request

from rental_api.account import store
from rental_api.core.settings import get_settings
from rental_api.db.engine import engine

SESSION_KEY = "admin_account_id"


def _default_session() -> Session:
    return Session(engine)


class AdminAuth(AuthenticationBackend):
    """SQLAdmin login for accounts holding the admin role.

    The back-office shares the account table with the API: an admin signs
    in with the same email and password, and the account id is kept in the
    signed Starlette session.
    """

    def __init__(self, session_factory: Callable[[], Session] = _default_session):
        # SQLAdmin uses this secret internally (e.g. login form protection).
        settings = get_settings()
        super().__init__(secret_key=settings.session_secret_key)
        self._session_factory = session_factory

    async def login(self, request: Request) -> bool:
        form = await request.form()
        email = str(form.get("username", form.get("email", "")))
        password = str(form.get("password", ""))

        with self._session_factory() as session:
            account = store.get_account_by_email(session, email)
            if (
                account is None
                or not account.is_admin
                or not store.check_password(account, password)
            ):
                return False
            request.session[SESSION_KEY] = str(account.id)
        return True

    async def logout(self, request: Request) -> bool:
        request.session.clear()
        return True

    async def authenticate(self, request: Request) -> bool:
        """Re-check the signed-in account on every back-office request.

        A demoted or deleted admin loses access immediately.
        """
        raw_id = request.session.get(SESSION_KEY)
        if not raw_id:
            return False

        if self._is_admin(str(raw_id)):
            return True
        request.session.clear()
        return False

    def _is_admin(self, raw_id: str) -> bool:
        try:
            account_id = uuid.UUID(raw_id)
        except ValueError:
            return False

        with self._session_factory() as session:
            account = store.get_account_by_id(session, account_id)
            return account is not None and account.is_admin
