"""
Auth service helper.

Wraps the user management and password sign-in endpoints of the auth service.
The signed-in user is kept on the helper, persisted in a
[`StorageProtocol`][wedeploy.storage.StorageProtocol] implementation and
restored when a new helper is created over the same storage.
"""

from concurrent.futures import Future
from typing import TYPE_CHECKING, Any, Callable, Mapping, Optional

from ..assertions import (
    assert_auth_scope,
    assert_function,
    assert_not_null,
    assert_object,
    assert_response_succeeded,
    assert_user_signed_in,
)
from ..comm.futures import then
from ..logging_config import get_logger
from ..models.auth import Auth
from ..storage import MemoryStorage, StorageProtocol
from .api_helper import ApiHelper

if TYPE_CHECKING:
    from ..comm.request_builder import RequestBuilder
    from ..comm.wedeploy_client import WeDeployClient

# Set the hierarchical logger
logger = get_logger(__name__)

CURRENT_USER_STORAGE_KEY = "currentUser"


class AuthApiHelper(ApiHelper):
    """
    Builds and sends requests to the auth service.

    Obtained from [`WeDeployClient.auth()`][wedeploy.comm.WeDeployClient.auth].
    Every remote operation returns a `concurrent.futures.Future`; responses
    with a non-2xx status fail the future with a
    [`ResponseError`][wedeploy.assertions.ResponseError].

    Example:
        ```python
        auth = client.auth("https://auth.example.com")
        auth.on_sign_in(lambda user: print(f"Welcome {user.name}"))

        user = auth.sign_in_with_email_and_password("me@example.com", "secret").result()
        users = auth.get_all_users().result()
        auth.sign_out().result()
        ```
    """

    def __init__(
        self,
        client: "WeDeployClient",
        auth_url: str,
        storage: Optional[StorageProtocol] = None,
    ):
        super().__init__(client)
        assert_not_null(auth_url, "Auth url must be specified")
        self._auth_url = auth_url
        self._storage = storage if storage is not None else MemoryStorage()
        self.current_user: Optional[Auth] = None
        self._on_sign_in_callback: Optional[Callable[[Optional[Auth]], Any]] = None
        self._on_sign_out_callback: Optional[Callable[[Optional[Auth]], Any]] = None
        self._restore_current_user()

    def create_auth_from_data(self, data: Optional[Mapping]) -> Auth:
        """Creates an [`Auth`][wedeploy.models.Auth] bound to this helper's client."""
        auth = Auth.create_from_data(data, self._auth_url)
        auth.set_client(self._client, self._auth_url)
        return auth

    def resolve_auth_scope(self) -> Optional[Auth]:
        """Returns the helper credentials if set, otherwise the signed-in user."""
        if self._helper_auth_scope is not None:
            return self._helper_auth_scope
        return self.current_user

    # --- Users ---

    def create_user(self, data: Mapping) -> Future:
        """
        Creates a user.

        Returns:
            A future resolving with the [`Auth`][wedeploy.models.Auth] of the new user.
        """
        assert_object(data, "User data must be specified as object")
        request = self._build_url().path("/users")
        auth_scope = self.resolve_auth_scope()
        if auth_scope is not None:
            request.auth(auth_scope.get_token())
        future = then(request.post(dict(data)), assert_response_succeeded)
        return then(future, lambda response: self.create_auth_from_data(response.body))

    def get_user(self, user_id: Any) -> Future:
        assert_not_null(user_id, "User userId must be specified")
        assert_auth_scope(self)
        request = self._build_url().path("/users", str(user_id)).auth(self._scope_token())
        future = then(request.get(), assert_response_succeeded)
        return then(future, lambda response: self.create_auth_from_data(response.body))

    def get_all_users(self) -> Future:
        """Returns a future resolving with the list of every user."""
        assert_auth_scope(self)
        request = self._build_url().path("/users").auth(self._scope_token())
        future = then(request.get(), assert_response_succeeded)
        return then(
            future,
            lambda response: [self.create_auth_from_data(data) for data in response.body or []],
        )

    def update_user(self, user_id: Any, data: Mapping) -> Future:
        assert_not_null(user_id, "Cannot update user without id")
        assert_object(data, "User data must be specified as object")
        assert_auth_scope(self)
        request = self._build_url().path("/users", str(user_id)).auth(self._scope_token())
        return then(request.patch(dict(data)), assert_response_succeeded)

    def delete_user(self, user_id: Any) -> Future:
        assert_not_null(user_id, "Cannot delete user without id")
        assert_auth_scope(self)
        request = self._build_url().path("/users", str(user_id)).auth(self._scope_token())
        return then(request.delete(), assert_response_succeeded)

    # --- Sign-in ---

    def sign_in_with_email_and_password(self, email: str, password: str) -> Future:
        """
        Exchanges the user credentials for an access token, then loads the
        user behind it.

        Returns:
            A future resolving with the signed-in [`Auth`][wedeploy.models.Auth].
            The sign-in callback runs before the future resolves.
        """
        assert_not_null(email, "Sign-in email must be specified")
        assert_not_null(password, "Sign-in password must be specified")
        request = (
            self._build_url()
            .path("/oauth/token")
            .form("grant_type", "password")
            .form("username", email)
            .form("password", password)
        )
        future = then(request.post(), assert_response_succeeded)
        future = then(
            future, lambda response: self.load_current_user(response.body["access_token"])
        )
        return then(future, self._signed_in)

    def sign_out(self) -> Future:
        """
        Revokes the token of the signed-in user and forgets the user.

        Raises:
            AuthError: If no user is signed in.
        """
        assert_user_signed_in(self.current_user)
        request = self._build_url().path("/oauth/revoke").form("token", self.current_user.token)
        future = then(request.post(), assert_response_succeeded)
        return then(future, self._signed_out)

    def send_password_reset_email(self, email: str) -> Future:
        """
        Asks the auth service to send a password reset email. The call does not
        fail when the email is unknown.
        """
        assert_not_null(email, "Send password reset email must be specified")
        request = self._build_url().path("/user/recover").param("email", email)
        return then(request.post(), assert_response_succeeded)

    def verify_token(self, token: str) -> Future:
        """Returns a future resolving with the decoded token payload."""
        assert_not_null(token, "Token must be specified")
        request = self._build_url().path("/oauth/tokeninfo").param("token", token)
        future = then(request.get(), assert_response_succeeded)
        return then(future, lambda response: response.body)

    def verify_user(self, token_or_email: str, password: Optional[str] = None) -> Future:
        """
        Fetches the user owning a token, or an email and password.

        Returns:
            A future resolving with an [`Auth`][wedeploy.models.Auth] that also
            carries the credentials used.
        """
        assert_not_null(token_or_email, "Token or email must be specified")
        request = self._build_url().path("/user").auth(token_or_email, password)

        def _to_auth(response):
            data = dict(response.body or {})
            if password:
                data["email"] = token_or_email
                data["password"] = password
            else:
                data["token"] = token_or_email
            return self.create_auth_from_data(data)

        return then(then(request.get(), assert_response_succeeded), _to_auth)

    def load_current_user(self, token: str) -> Future:
        """Verifies `token` and stores its user as the current user."""

        def _store(user: Auth) -> Auth:
            self.current_user = user
            self._storage.set(CURRENT_USER_STORAGE_KEY, user.get_data())
            logger.debug(f"Current user loaded from '{self._auth_url}'")
            return user

        return then(self.verify_user(token), _store)

    # --- Callbacks ---

    def on_sign_in(self, callback: Callable[[Optional[Auth]], Any]):
        """Sets the callback fired after a sign-in. Only the last callback is kept."""
        assert_function(callback, "Sign-in callback must be a function")
        self._on_sign_in_callback = callback

    def on_sign_out(self, callback: Callable[[Optional[Auth]], Any]):
        """Sets the callback fired after a sign-out. Only the last callback is kept."""
        assert_function(callback, "Sign-out callback must be a function")
        self._on_sign_out_callback = callback

    # --- Internals ---

    def _build_url(self) -> "RequestBuilder":
        return self._client.url(self._auth_url).headers(self._headers)

    def _scope_token(self) -> Optional[str]:
        return self.resolve_auth_scope().get_token()

    def _signed_in(self, user: Auth) -> Auth:
        if self._on_sign_in_callback is not None:
            self._on_sign_in_callback(self.current_user)
        return user

    def _signed_out(self, response):
        if self._on_sign_out_callback is not None:
            self._on_sign_out_callback(self.current_user)
        self.current_user = None
        self._storage.remove(CURRENT_USER_STORAGE_KEY)
        return response

    def _restore_current_user(self):
        data = self._storage.get(CURRENT_USER_STORAGE_KEY)
        if data:
            self.current_user = self.create_auth_from_data(data)
            logger.debug(f"Current user restored for '{self._auth_url}'")
