from .futures import then as then, resolved as resolved
from .request import ClientRequest as ClientRequest, ClientResponse as ClientResponse
from .transport import (
    Transport as Transport,
    HttpTransport as HttpTransport,
    TransportError as TransportError,
)
from .config import ClientConfig as ClientConfig
from .request_builder import RequestBuilder as RequestBuilder
from .wedeploy_client import WeDeployClient as WeDeployClient
