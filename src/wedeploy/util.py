"""
URL and header helpers.

`join_paths` and `has_scheme` are used by the client and the transport.
`parse_url`, `parse_url_context_path` and `parse_response_headers` are not
called by the SDK itself; they are public helpers for code that builds its
own [`Transport`][wedeploy.comm.Transport] on a raw HTTP stack.
"""

import re
from typing import Dict, List, Tuple

_SCHEME_PREFIX = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*://")


def parse_url(url: str) -> Tuple[str, str]:
    """
    Splits `url` into `(host, path)`, ignoring the scheme.

    Example:
        `parse_url("http://localhost:8080/path/a")` returns
        `("localhost:8080", "/path/a")`; `parse_url("/path/a")` returns
        `("", "/path/a")`; `parse_url("localhost:8080")` returns
        `("localhost:8080", "/")`.
    """
    url = _SCHEME_PREFIX.sub("", url, count=1)
    if url.startswith("//"):
        url = url[2:]
    if url.startswith("/"):
        return "", url

    host, sep, path = url.partition("/")
    return host, f"/{path}" if sep else "/"


def parse_url_context_path(url: str) -> str:
    """Returns the first path segment of `url` (e.g. `"/path"`), or `"/"`."""
    _, path = parse_url(url)
    end = path.find("/", 1)
    return path[:end] if end > 0 else path


def join_paths(base_path: str, *paths: str) -> str:
    """
    Joins URL path segments with exactly one `/` between them.

    Example:
        `join_paths("foo/", "/bar")` returns `"foo/bar"`;
        `join_paths("foo", "")` returns `"foo/"`.
    """
    if base_path.endswith("/"):
        base_path = base_path[:-1]
    segments = [p[1:] if p.startswith("/") else p for p in paths]
    return "/".join([base_path, *segments])


def has_scheme(url: str) -> bool:
    return _SCHEME_PREFIX.match(url) is not None


def parse_response_headers(raw_headers: str) -> List[Dict[str, str]]:
    """
    Parses a raw `Name: Value` header block (CRLF separated) into an ordered
    list of `{"name": ..., "value": ...}` entries. Repeated names are kept.
    """
    headers = []
    for line in raw_headers.split("\r\n"):
        if not line:
            continue
        name, _, value = line.partition(":")
        headers.append({"name": name.strip(), "value": value.strip()})
    return headers
