from enum import StrEnum


class HttpMethod(StrEnum):
    """
    HTTP verbs used by the SDK when dispatching a
    [`ClientRequest`][wedeploy.comm.ClientRequest].
    """

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
