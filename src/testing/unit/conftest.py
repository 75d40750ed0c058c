from typing import Any, Callable, List, Optional

import pytest

from wedeploy.comm import ClientConfig, ClientRequest, ClientResponse, Transport, WeDeployClient
from wedeploy.comm.futures import resolved

DATA_URL = "https://data.example.com"
AUTH_URL = "https://auth.example.com"


class RecordingTransport(Transport):
    """Answers every request synchronously through `responder` and keeps the requests."""

    def __init__(self, responder: Optional[Callable[[ClientRequest], Any]] = None):
        self.requests: List[ClientRequest] = []
        self.responder = responder or (lambda request: (200, None))
        self.closed = False

    def send(self, request: ClientRequest):
        self.requests.append(request)
        status_code, body = self.responder(request)
        return resolved(ClientResponse(request=request, status_code=status_code, body=body))

    def close(self):
        self.closed = True

    @property
    def last(self) -> ClientRequest:
        return self.requests[-1]


@pytest.fixture
def _transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def _client(_transport: RecordingTransport):
    client = WeDeployClient(
        ClientConfig(data_url=DATA_URL, auth_url=AUTH_URL), transport=_transport
    )
    yield client
    client.close()
