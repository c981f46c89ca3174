"""Sign-up, sign-in and sign-out for the storefront."""

import structlog
from protean.exceptions import ValidationError

from storefront.api.endpoints import StorefrontApi
from storefront.api.transport import ApiError
from storefront.models import UserProfile
from storefront.notifications import ToastService
from storefront.session import Session
from storefront.validation import first_error, validate_login, validate_registration

logger = structlog.get_logger(__name__)


class AuthService:
    def __init__(self, api: StorefrontApi, session: Session, toasts: ToastService):
        self._api = api
        self._session = session
        self._toasts = toasts

    def _check(self, validate, *args) -> None:
        try:
            validate(*args)
        except ValidationError as exc:
            self._toasts.warning(first_error(exc))
            raise

    def register(
        self, username: str, phone: str, password: str, confirm_password: str, email: str | None = None
    ) -> UserProfile:
        self._check(validate_registration, username, phone, password, confirm_password)

        try:
            result = self._api.register(username.strip(), phone, password, email or None)
        except ApiError as exc:
            self._toasts.error(exc.message or "Registration failed, please try again later")
            raise

        self._session.sign_in(result.token, result.user)
        self._toasts.success("Registered successfully")
        return result.user

    def login(self, phone: str, password: str) -> UserProfile:
        self._check(validate_login, phone, password)

        try:
            result = self._api.login(phone, password)
        except ApiError as exc:
            self._toasts.error(exc.message or "Login failed, please check your phone number and password")
            raise

        self._session.sign_in(result.token, result.user)
        self._toasts.success("Logged in")
        return result.user

    def logout(self) -> None:
        self._session.clear()
        self._toasts.success("Logged out")

    def restore(self) -> bool:
        """Re-validate a stored token at start-up; drop the session if the server rejects it."""
        if not self._session.token:
            return False
        try:
            user = self._api.current_user()
        except ApiError as exc:
            logger.info("stored_session_rejected", status=exc.status_code)
            self._session.clear()
            return False
        self._session.update_user(user)
        return True
