"""Request utilities for resolving the real client IP address.

The client address is taken, in order, from the first entry of the
forwarded-for header, the real-IP header, and finally the transport's
connection address. Every candidate is validated and returned in canonical
form; anything unusable degrades to the empty string.

Only use these helpers when a reverse proxy in front of the application
controls both headers. Otherwise clients can put any value they like in them.
"""

import ipaddress
import logging
from collections.abc import Mapping
from typing import Final

from fastapi import Request
from starlette.datastructures import Address

from realip.core.config import settings
from realip.core.errors import AddressError

logger = logging.getLogger(__name__)

NO_IP: Final[str] = ""
FORWARDED_FOR_SEPARATOR: Final[str] = ", "

MISSING_PORT: Final[str] = "missing port in address"
TOO_MANY_COLONS: Final[str] = "too many colons in address"


def split_host_port(hostport: str) -> tuple[str, str]:
    """Split a network address of the form host:port or [host]:port.

    The port is returned as-is and may be empty.

    Raises:
        AddressError: If the address is not a host/port pair
    """
    i = hostport.rfind(":")
    if i < 0:
        raise AddressError(MISSING_PORT, hostport)

    j = k = 0
    if hostport.startswith("["):
        end = hostport.find("]")
        if end < 0:
            raise AddressError("missing ']' in address", hostport)
        if end + 1 == len(hostport):
            raise AddressError(MISSING_PORT, hostport)
        if end + 1 != i:
            if hostport[end + 1] == ":":
                raise AddressError(TOO_MANY_COLONS, hostport)
            raise AddressError(MISSING_PORT, hostport)
        host = hostport[1:end]
        j, k = 1, end + 1
    else:
        host = hostport[:i]
        if ":" in host:
            raise AddressError(TOO_MANY_COLONS, hostport)

    if "[" in hostport[j:]:
        raise AddressError("unexpected '[' in address", hostport)
    if "]" in hostport[k:]:
        raise AddressError("unexpected ']' in address", hostport)

    return host, hostport[i + 1:]


def _canonical(ip: ipaddress.IPv4Address | ipaddress.IPv6Address) -> str:
    if isinstance(ip, ipaddress.IPv6Address) and ip.ipv4_mapped is not None:
        return str(ip.ipv4_mapped)
    return str(ip)


def check_ip(raw_ip: str) -> str:
    """Validate a candidate address and return its canonical form.

    Args:
        raw_ip: Bare address or host:port pair

    Returns:
        Canonical IP string, or the empty string if the candidate is unusable
    """
    try:
        return _canonical(ipaddress.ip_address(raw_ip))
    except ValueError:
        pass

    host = raw_ip
    if ":" in raw_ip:
        try:
            host, _ = split_host_port(raw_ip)
        except AddressError as e:
            logger.debug("check_ip: %r is not IP:port (%s)", raw_ip, e.message)
            return NO_IP

    try:
        ip = ipaddress.ip_address(host)
    except ValueError:
        logger.debug("check_ip: %r is not an IP address", raw_ip)
        return NO_IP

    return _canonical(ip)


def format_remote_addr(client: Address | tuple[str, int] | None) -> str:
    """Render the ASGI client tuple as a host:port connection address."""
    if not client:
        return NO_IP

    host, port = client
    if not host:
        return NO_IP
    if ":" in host:
        return f"[{host}]:{port}"
    return f"{host}:{port}"


def resolve_real_ip(
    headers: Mapping[str, str],
    remote_addr: str,
    forwarded_for_header: str = settings.FORWARDED_FOR_HEADER,
    real_ip_header: str = settings.REAL_IP_HEADER,
) -> str:
    """Resolve the client IP from proxy headers and the connection address.

    Args:
        headers: Request headers; lookups must be case-insensitive
        remote_addr: Connection address as host:port
        forwarded_for_header: Name of the forwarded-for header
        real_ip_header: Name of the real-IP header

    Returns:
        Canonical client IP, or the empty string if none can be determined
    """
    xff = headers.get(forwarded_for_header)
    if xff:
        first, _, _ = xff.partition(FORWARDED_FOR_SEPARATOR)
        ip = check_ip(first)
        if ip:
            return ip

    xrip = headers.get(real_ip_header)
    if xrip:
        ip = check_ip(xrip)
        if ip:
            return ip

    return check_ip(remote_addr)


def get_client_ip(request: Request) -> str:
    """Resolve the client IP for a request without going through middleware."""
    return resolve_real_ip(request.headers, format_remote_addr(request.client))
