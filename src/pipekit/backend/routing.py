"""URL assembly: per-segment path escaping and base URI joining."""

from __future__ import annotations

from urllib.parse import SplitResult, quote, urlsplit, urlunsplit

from pipekit.core.exceptions import ConfigurationError, InvalidPipeError
from pipekit.core.protocols import IParamsContainer
from pipekit.models.meta import Route


def escape_segment(value: str) -> str:
    """Percent-escape a single path segment value.

    Everything outside the RFC 3986 unreserved set is escaped, including
    ``/``. Dot-only values are escaped too so they cannot act as relative
    path references.
    """
    if value in (".", ".."):
        return value.replace(".", "%2E")
    return quote(value, safe="")


def format_url_path(route: Route, template: str, **segments: str) -> str:
    """Expand ``template`` under the route's marker segment.

    Each keyword value is escaped on its own before substitution, e.g.
    ``format_url_path(Route.HOSTED, "v1/users/{user}", user="a b")`` gives
    ``"events-handler/v1/users/a%20b"``.

    Raises:
        InvalidPipeError: If any segment value is empty.
    """
    escaped: dict[str, str] = {}
    for name, value in segments.items():
        if not value:
            raise InvalidPipeError(f"path segment {name!r} must not be empty")
        escaped[name] = escape_segment(value)
    return f"{route.value}/{template.format(**escaped)}"


def check_base_uri(base_uri: str) -> SplitResult:
    """Parse a base URI, failing fast on anything but an absolute http(s) URL."""
    try:
        parts = urlsplit(base_uri)
    except ValueError as exc:
        raise ConfigurationError(f"Malformed base URI {base_uri!r}: {exc}") from exc
    if parts.scheme not in ("http", "https") or not parts.netloc:
        raise ConfigurationError(f"Base URI must be an absolute http(s) URL, got {base_uri!r}")
    if parts.query or parts.fragment:
        raise ConfigurationError(f"Base URI must not carry a query or fragment, got {base_uri!r}")
    return parts


def _check_logical_path(path: str) -> None:
    if "://" in path or "?" in path or "#" in path:
        raise ConfigurationError(f"Logical path must be a bare relative path, got {path!r}")
    if any(ch.isspace() for ch in path):
        raise ConfigurationError(f"Logical path contains unescaped whitespace: {path!r}")


def join_path(*parts: str) -> str:
    """Join path pieces as slash-separated segments without duplicate slashes."""
    segments = [segment for part in parts for segment in part.split("/") if segment]
    return "/" + "/".join(segments)


def build_url(base_uri: str, path: str, params: IParamsContainer | None = None) -> str:
    """Join ``base_uri`` and ``path`` and append the encoded query, if any."""
    base = check_base_uri(base_uri)
    _check_logical_path(path)
    query = params.get_params().encode() if params is not None else ""
    return urlunsplit((base.scheme, base.netloc, join_path(base.path, path), query, ""))
