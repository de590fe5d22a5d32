"""HTTP semantic-convention attributes derived from an httpx.Request.

Attribute names follow the OpenTelemetry HTTP/net conventions (schema 1.4). Only
attributes that can be derived from the request are emitted.
"""

from __future__ import annotations

import base64
import binascii

import httpx

from tracelog.fields.attribute import Attribute

NET_TRANSPORT = "net.transport"
NET_HOST_NAME = "net.host.name"
NET_HOST_PORT = "net.host.port"
ENDUSER_ID = "enduser.id"
HTTP_METHOD = "http.method"
HTTP_URL = "http.url"
HTTP_TARGET = "http.target"
HTTP_SCHEME = "http.scheme"
HTTP_HOST = "http.host"
HTTP_SERVER_NAME = "http.server_name"
HTTP_ROUTE = "http.route"
HTTP_USER_AGENT = "http.user_agent"
HTTP_CLIENT_IP = "http.client_ip"
HTTP_REQUEST_CONTENT_LENGTH = "http.request_content_length"

_DEFAULT_PORTS = {"http": 80, "https": 443}


def net_attributes(request: httpx.Request, transport: str = "ip_tcp") -> list[Attribute]:
    """Network transport and host attributes."""
    attrs = [Attribute(NET_TRANSPORT, transport)]
    host, port = _split_host(request)
    if host:
        attrs.append(Attribute(NET_HOST_NAME, host))
    if port:
        attrs.append(Attribute(NET_HOST_PORT, port))
    return attrs


def enduser_attributes(request: httpx.Request) -> list[Attribute]:
    """enduser.id from a Basic Authorization header, when present and decodable."""
    if (user := _basic_auth_user(request.headers.get("authorization", ""))) is None:
        return []
    return [Attribute(ENDUSER_ID, user)]


def server_attributes(request: httpx.Request, server_name: str = "http.server", route: str | None = None) -> list[Attribute]:
    """Request line and header derived server attributes."""
    url = request.url
    attrs = [
        Attribute(HTTP_METHOD, request.method),
        Attribute(HTTP_URL, _redacted(url)),
        Attribute(HTTP_TARGET, url.raw_path.decode("ascii", "replace")),
        Attribute(HTTP_SCHEME, url.scheme),
        Attribute(HTTP_HOST, request.headers.get("host") or url.netloc.decode("ascii", "replace")),
    ]
    if server_name:
        attrs.append(Attribute(HTTP_SERVER_NAME, server_name))
    attrs.append(Attribute(HTTP_ROUTE, route if route is not None else url.path))
    if ua := request.headers.get("user-agent"):
        attrs.append(Attribute(HTTP_USER_AGENT, ua))
    if fwd := request.headers.get("x-forwarded-for"):
        attrs.append(Attribute(HTTP_CLIENT_IP, fwd.split(",", 1)[0].strip()))
    if (length := request.headers.get("content-length", "")).isdigit():
        attrs.append(Attribute(HTTP_REQUEST_CONTENT_LENGTH, int(length)))
    return attrs


def request_attributes(request: httpx.Request, server_name: str = "http.server") -> list[Attribute]:
    """Every HTTP attribute tagged on a span when a request is injected."""
    return [*net_attributes(request), *enduser_attributes(request), *server_attributes(request, server_name)]


def _split_host(request: httpx.Request) -> tuple[str, int | None]:
    url = request.url
    if raw := request.headers.get("host"):
        host, sep, port = raw.rpartition(":")
        if sep and port.isdigit():
            return host, int(port)
        return raw, _DEFAULT_PORTS.get(url.scheme)
    return url.host, url.port or _DEFAULT_PORTS.get(url.scheme)


def _basic_auth_user(header: str) -> str | None:
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "basic" or not token:
        return None
    try:
        decoded = base64.b64decode(token.strip(), validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        return None
    user, sep, _ = decoded.partition(":")
    return user if sep and user else None


def _redacted(url: httpx.URL) -> str:
    if not url.userinfo:
        return str(url)
    return str(url).replace(url.userinfo.decode("ascii", "replace") + "@", "", 1)
