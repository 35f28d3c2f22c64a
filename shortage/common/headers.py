"""Working out the public address of the service behind a proxy."""

from typing import Dict, Mapping, Optional

FORWARDED_HEADERS = {
    "forwarded_proto": "x-forwarded-proto",
    "forwarded_host": "x-forwarded-host",
    "forwarded_for": "x-forwarded-for",
}


def extract_forwarded_headers(headers: Mapping[str, str]) -> Dict[str, Optional[str]]:
    """Pick the X-Forwarded-* values out of ``headers`` (any key case)."""
    lowered = {key.lower(): value for key, value in headers.items()}
    return {field: lowered.get(header) for field, header in FORWARDED_HEADERS.items()}


def build_base_url(
    headers: Mapping[str, str],
    fallback_base_url: str,
    request_scheme: Optional[str] = None,
    request_host: Optional[str] = None,
) -> str:
    """Return the scheme and host short links are shown under, without a trailing slash.

    A reverse proxy's X-Forwarded-Proto and X-Forwarded-Host win, then the
    request's own scheme and Host header, then ``fallback_base_url``.
    """
    forwarded = extract_forwarded_headers(headers)
    proto, host = forwarded["forwarded_proto"], forwarded["forwarded_host"]

    if not (proto and host):
        proto, host = request_scheme, request_host
    if proto and host:
        return f"{proto}://{host}"

    return fallback_base_url.rstrip("/")
