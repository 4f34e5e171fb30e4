"""CORS origin helpers."""

from typing import List
from urllib.parse import urlsplit

DEFAULT_PORTS = {"http": 80, "https": 443}


def generate_allowed_origins(raw_url: str) -> List[str]:
    """
    Origins for a frontend URL: the URL's own origin plus its ``www.`` twin.

    ``https://example.com/`` -> ``["https://example.com", "https://www.example.com"]``
    ``https://www.example.com:8443`` -> ``["https://www.example.com:8443", "https://example.com:8443"]``
    """
    if not raw_url:
        return []

    parts = urlsplit(raw_url.strip().rstrip("/"))
    if not parts.scheme or not parts.hostname:
        raise ValueError(f"Invalid frontend URL: {raw_url!r}")

    default_port = DEFAULT_PORTS.get(parts.scheme)
    port = f":{parts.port}" if parts.port and parts.port != default_port else ""

    def format_origin(host: str) -> str:
        return f"{parts.scheme}://{host}{port}"

    hostname = parts.hostname
    origins = [format_origin(hostname)]

    alt_hostname = hostname[4:] if hostname.startswith("www.") else f"www.{hostname}"
    if alt_hostname and alt_hostname != hostname:
        origins.append(format_origin(alt_hostname))
    return origins


def build_allowed_origins(dev_frontend_url: str, frontend_url: str) -> List[str]:
    origins = [dev_frontend_url.rstrip("/")] if dev_frontend_url else []
    for origin in generate_allowed_origins(frontend_url):
        if origin not in origins:
            origins.append(origin)
    return origins
