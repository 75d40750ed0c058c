"""
Authorization model.

An [`Auth`][wedeploy.models.Auth] carries the credentials attached to
outgoing requests (a token, or an email/password pair) together with the user
data returned by the auth service.
"""

from collections.abc import Mapping
from concurrent.futures import Future
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr
from pydantic.alias_generators import to_camel

from ..assertions import assert_not_null, assert_object, assert_response_succeeded
from ..comm.futures import then

if TYPE_CHECKING:
    from ..comm.request_builder import RequestBuilder
    from ..comm.wedeploy_client import WeDeployClient


class Auth(BaseModel):
    """
    Credentials and profile of a user.

    User data coming from the auth service uses camelCase keys
    (`createdAt`, `photoUrl`, `supportedScopes`): they populate the
    snake_case fields below. Keys without a matching field are kept as extra
    attributes.

    Example:
        ```python
        Auth("my-token").has_token()                      # True
        Auth("me@example.com", "secret").get_email()      # "me@example.com"
        Auth.create({"id": "1", "photoUrl": "x"}).photo_url  # "x"
        ```
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    token: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    created_at: Optional[Any] = None
    id: Optional[Any] = None
    name: Optional[str] = None
    photo_url: Optional[str] = None
    supported_scopes: List[str] = Field(default_factory=list)

    _data: Optional[Dict[str, Any]] = PrivateAttr(default=None)
    _headers: Dict[str, str] = PrivateAttr(default_factory=dict)
    _client: Any = PrivateAttr(default=None)
    _auth_url: Optional[str] = PrivateAttr(default=None)

    def __init__(
        self,
        token_or_email: Optional[str] = None,
        password: Optional[str] = None,
        **data: Any,
    ):
        """
        Args:
            token_or_email: The authorization token or, when `password` is
                given, the user email.
            password: The user password.
        """
        if token_or_email is not None:
            if isinstance(password, str):
                data.setdefault("email", token_or_email)
            else:
                data.setdefault("token", token_or_email)
        if password is not None:
            data.setdefault("password", password)
        super().__init__(**data)

    # --- Factories ---

    @classmethod
    def create(
        cls,
        auth_or_token_or_email: Optional[Union["Auth", str, Mapping]] = None,
        password: Optional[str] = None,
    ) -> "Auth":
        """
        Resolves the accepted credential shapes into an `Auth`:

        * an `Auth` instance, returned unchanged;
        * `(email, password)`;
        * a token string;
        * a mapping of user data (see `create_from_data`);
        * nothing, for an empty `Auth`.
        """
        if isinstance(auth_or_token_or_email, Auth):
            return auth_or_token_or_email
        if isinstance(auth_or_token_or_email, str):
            return cls(auth_or_token_or_email, password)
        if isinstance(auth_or_token_or_email, Mapping):
            return cls.create_from_data(auth_or_token_or_email)
        return cls()

    @classmethod
    def create_from_data(
        cls, data: Optional[Mapping], auth_url: Optional[str] = None
    ) -> "Auth":
        """Creates an `Auth` from the user data returned by the auth service."""
        if isinstance(data, Mapping):
            auth = cls.model_validate(dict(data))
            auth._data = dict(data)
        else:
            auth = cls()
        auth._auth_url = auth_url
        return auth

    # --- Accessors ---

    def get_created_at(self) -> Optional[Any]:
        return self.created_at

    def get_data(self) -> Optional[Dict[str, Any]]:
        return self._data

    def get_email(self) -> Optional[str]:
        return self.email

    def get_headers(self) -> Dict[str, str]:
        return self._headers

    def get_id(self) -> Optional[Any]:
        return self.id

    def get_name(self) -> Optional[str]:
        return self.name

    def get_password(self) -> Optional[str]:
        return self.password

    def get_photo_url(self) -> Optional[str]:
        return self.photo_url

    def get_supported_scopes(self) -> List[str]:
        return self.supported_scopes

    def get_token(self) -> Optional[str]:
        return self.token

    def has_created_at(self) -> bool:
        return self.created_at is not None

    def has_data(self) -> bool:
        return self._data is not None

    def has_email(self) -> bool:
        return self.email is not None

    def has_id(self) -> bool:
        return self.id is not None

    def has_name(self) -> bool:
        return self.name is not None

    def has_password(self) -> bool:
        return self.password is not None

    def has_photo_url(self) -> bool:
        return self.photo_url is not None

    def has_token(self) -> bool:
        return self.token is not None

    def has_supported_scopes(self, scopes: Union[str, Sequence[str]]) -> bool:
        """True if the user has the given scope, or every scope of the list."""
        if isinstance(scopes, str):
            return scopes in self.supported_scopes
        return all(scope in self.supported_scopes for scope in scopes)

    # --- Mutators ---

    def set_data(self, data: Optional[Dict[str, Any]]):
        self._data = data

    def set_headers(self, headers: Mapping[str, str]):
        """Merges `headers` into the headers sent with this user's requests."""
        self._headers.update(headers)

    def set_client(self, client: Optional["WeDeployClient"], auth_url: Optional[str]):
        """Binds the client and auth service URL used by `update_user`/`delete_user`."""
        self._client = client
        self._auth_url = auth_url

    # --- Remote operations ---

    def update_user(self, data: Mapping) -> Future:
        """Patches this user on the auth service."""
        assert_object(data, "User data must be specified as object")
        request = self._build_url().path("/users", str(self.id)).auth(self)
        return then(request.patch(dict(data)), assert_response_succeeded)

    def delete_user(self) -> Future:
        """Deletes this user from the auth service."""
        assert_not_null(self.id, "Cannot delete user without id")
        request = self._build_url().path("/users", str(self.id)).auth(self)
        return then(request.delete(), assert_response_succeeded)

    def _build_url(self) -> "RequestBuilder":
        assert_not_null(self._auth_url, "Cannot perform operation without an auth url")
        assert_not_null(self._client, "Cannot perform operation without a client")
        return self._client.url(self._auth_url).headers(self._headers)
