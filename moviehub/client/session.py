"""Client session controller: signup, login, logout and the navigation state they drive."""

import time
from typing import Any, Callable, Dict, Optional

import httpx
import structlog
from pydantic import BaseModel, ValidationError

from moviehub.core.exceptions import TransportError
from moviehub.domain.schemas.auth import UserRead
from moviehub.client.storage import FileStorage

logger = structlog.get_logger(__name__)

SESSION_KEY = "moviehubUser"
AUTH_PATH = "/api/auth"

FORM_MESSAGE_SECONDS = 5
NOTICE_SECONDS = 3

LOGIN_FORM = "login"
SIGNUP_FORM = "signup"


class NavState(BaseModel):
    authenticated: bool = False
    greeting: Optional[str] = None
    show_logout: bool = False


class TimedMessage(BaseModel):
    text: str
    expires_at: float


class SessionController:
    """Keeps the current user in durable storage and mirrors it in the UI state.

    ``clock`` returns seconds and only needs to be monotonic; form messages
    and notices disappear once it passes their expiry. ``on_reload`` replaces
    the controller-local reload with a full page reload.
    """

    def __init__(
        self,
        http: httpx.Client,
        storage: FileStorage,
        clock: Callable[[], float] = time.monotonic,
        on_reload: Optional[Callable[[], None]] = None,
    ):
        self.http = http
        self.storage = storage
        self.clock = clock
        self.on_reload = on_reload
        self._reset()

    def _reset(self) -> None:
        self.current_user: Optional[UserRead] = None
        self.nav = NavState()
        self.open_modal: Optional[str] = None
        self._form_messages: Dict[str, TimedMessage] = {}
        self._notice: Optional[TimedMessage] = None

    # -- page lifecycle ------------------------------------------------------

    def restore(self) -> Optional[UserRead]:
        """Pick up a session persisted by an earlier page load."""
        raw = self.storage.get_item(SESSION_KEY)
        if not raw:
            return None
        try:
            self.current_user = UserRead.model_validate_json(raw)
        except ValidationError:
            logger.warning("Discarding unreadable stored session")
            self.storage.remove_item(SESSION_KEY)
            return None
        self._show_authenticated()
        return self.current_user

    def reload(self) -> None:
        """Drop all in-memory UI state and start over from storage.

        When the controller belongs to a page, the whole page reloads instead.
        """
        if self.on_reload is not None:
            self.on_reload()
            return
        self._reset()
        self.restore()

    def logout(self) -> None:
        self.current_user = None
        self.storage.remove_item(SESSION_KEY)
        logger.info("Logged out")
        self.reload()

    # -- forms ---------------------------------------------------------------

    def signup(self, name: str, email: str, password: str) -> bool:
        return self._submit(
            SIGNUP_FORM,
            {"action": "signup", "name": name, "email": email, "password": password},
            fallback="Signup failed",
            notice="Account created successfully!",
        )

    def login(self, email: str, password: str) -> bool:
        return self._submit(
            LOGIN_FORM,
            {"action": "login", "email": email, "password": password},
            fallback="Login failed",
            notice="Login successful!",
        )

    def _post(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        try:
            response = self.http.post(AUTH_PATH, json=payload)
            data = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise TransportError(str(exc)) from exc
        if not isinstance(data, dict):
            raise TransportError("Unexpected response from the server")
        return data

    def _submit(self, form: str, payload: Dict[str, Any], fallback: str, notice: str) -> bool:
        try:
            data = self._post(payload)
        except TransportError as exc:
            logger.error("Auth request failed", form=form, error=exc.message)
            self._show_form_message(form, f"{fallback}. Please try again.")
            return False

        if not data.get("success"):
            self._show_form_message(form, data.get("message") or fallback)
            return False

        try:
            user = UserRead.model_validate(data.get("user"))
        except ValidationError:
            logger.error("Server returned an unusable user", form=form)
            self._show_form_message(form, f"{fallback}. Please try again.")
            return False

        self.current_user = user
        self.storage.set_item(SESSION_KEY, user.model_dump_json(by_alias=True))
        self._show_authenticated()
        self.close_modal()
        self._notice = TimedMessage(text=notice, expires_at=self.clock() + NOTICE_SECONDS)
        return True

    def _show_authenticated(self) -> None:
        self.nav = NavState(
            authenticated=True,
            greeting=f"Welcome, {self.current_user.name}!",
            show_logout=True,
        )

    def _show_form_message(self, form: str, text: str) -> None:
        self._form_messages[form] = TimedMessage(text=text, expires_at=self.clock() + FORM_MESSAGE_SECONDS)

    def form_message(self, form: str) -> Optional[str]:
        """The message shown under ``form``, if it has not expired yet."""
        message = self._form_messages.get(form)
        if message is None:
            return None
        if self.clock() >= message.expires_at:
            del self._form_messages[form]
            return None
        return message.text

    @property
    def notice(self) -> Optional[str]:
        if self._notice is None or self.clock() >= self._notice.expires_at:
            self._notice = None
            return None
        return self._notice.text

    # -- modals --------------------------------------------------------------

    def open_login_modal(self) -> None:
        self.open_modal = LOGIN_FORM

    def open_signup_modal(self) -> None:
        self.open_modal = SIGNUP_FORM

    def close_modal(self) -> None:
        self.open_modal = None

    switch_to_login = open_login_modal
    switch_to_signup = open_signup_modal
