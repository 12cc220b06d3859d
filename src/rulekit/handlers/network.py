"""Network address handlers.

- email: Looks like an email address; ``deep`` also requires the domain to
  resolve to an address (A/AAAA lookup, not an MX record check)
- ip: An IPv4 or IPv6 address, optionally restricted with ``version`` (4 or 6)
- url: An absolute URL, optionally restricted to the ``schemes`` option
"""

import ipaddress
import logging
import re
import socket
from typing import Any, Mapping
from urllib.parse import urlsplit

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(
    r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"
)

_SCHEME_PATTERN = re.compile(r"[a-zA-Z][a-zA-Z0-9+.-]*")

# Schemes whose URLs carry no network location
_OPAQUE_SCHEMES = {"mailto", "news", "urn", "tel"}


def _domain_resolves(domain: str) -> bool:
    try:
        socket.getaddrinfo(domain, None)
    except (OSError, UnicodeError) as exc:
        logger.debug("Email domain %s does not resolve: %s", domain, exc)
        return False
    return True


def email(value: Any, options: Mapping[str, Any]) -> bool:
    if not isinstance(value, str) or not EMAIL_PATTERN.match(value):
        return False
    if not options.get("deep"):
        return True
    return _domain_resolves(value.rsplit("@", 1)[1])


def ip(value: Any, options: Mapping[str, Any]) -> bool:
    if not isinstance(value, str):
        return False
    try:
        address = ipaddress.ip_address(value.strip())
    except ValueError:
        return False
    version = options.get("version")
    return version is None or address.version == int(version)


def url(value: Any, options: Mapping[str, Any]) -> bool:
    if not isinstance(value, str) or not value or any(c.isspace() for c in value):
        return False
    try:
        parts = urlsplit(value)
    except ValueError:
        return False
    if not parts.scheme or not _SCHEME_PATTERN.fullmatch(parts.scheme):
        return False
    schemes = options.get("schemes")
    if schemes and parts.scheme.lower() not in {s.lower() for s in schemes}:
        return False
    if parts.scheme.lower() in _OPAQUE_SCHEMES:
        return bool(parts.path)
    return bool(parts.netloc)
