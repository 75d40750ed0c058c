from typing import TYPE_CHECKING, Any, Dict, Optional

from ..assertions import assert_not_null
from ..models.auth import Auth

if TYPE_CHECKING:
    from ..comm.wedeploy_client import WeDeployClient


class ApiHelper:
    """
    Base class of the service helpers: keeps the headers and the auth scope
    attached to every request the helper sends.
    """

    def __init__(self, client: "WeDeployClient"):
        assert_not_null(client, "WeDeploy client reference must be specified")
        self._client = client
        self._headers: Dict[str, str] = {}
        self._helper_auth_scope: Optional[Auth] = None

    @property
    def client(self) -> "WeDeployClient":
        return self._client

    def header(self, name: str, value: str):
        """Adds a header to every request sent by this helper."""
        self._headers[name] = value
        return self

    def auth(self, auth_or_token_or_email: Any, password: Optional[str] = None):
        """
        Sets the credentials used by this helper; see
        [`Auth.create()`][wedeploy.models.Auth.create] for the accepted shapes.
        """
        self._helper_auth_scope = Auth.create(auth_or_token_or_email, password)
        return self
