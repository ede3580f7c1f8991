"""Forward and reverse name resolution for data server addresses."""

import ipaddress
import socket
import logging
from typing import List, Optional

from pnfscommon.exceptions import RecordFormatError, ResolutionError, ReverseResolutionError
from pnfscommon.record import IPAddress, ServerEndpoint

logger = logging.getLogger(__name__)


def resolve_server(hostname: Optional[str]) -> List[IPAddress]:
    """
    Resolve a data server name to its candidate addresses.

    Uses socket.getaddrinfo() without a family filter, so a host with both
    IPv4 and IPv6 addresses yields both. Order is the resolver's order and
    duplicates (one per socket type) are kept; callers take the first match.

    Args:
        hostname: Host name or address literal, or None for no filter

    Returns:
        List of IPv4Address/IPv6Address in resolution order.
        Empty list when hostname is None.

    Raises:
        ResolutionError: If resolution fails or yields no address
    """
    if hostname is None:
        return []

    try:
        results = socket.getaddrinfo(hostname, None)
    except (socket.gaierror, UnicodeError) as e:
        logger.debug(f"Resolution failed for '{hostname}': {e}")
        raise ResolutionError(f"Can't get IP# for {hostname}") from e

    candidates: List[IPAddress] = []
    for family, _, _, _, sockaddr in results:
        if family not in (socket.AF_INET, socket.AF_INET6):
            continue
        # getaddrinfo may append %zone to scoped IPv6 literals
        host = sockaddr[0].split('%', 1)[0]
        candidates.append(ipaddress.ip_address(host))

    if not candidates:
        raise ResolutionError(f"Can't get IP# for {hostname}")

    logger.debug(f"Resolved {hostname} -> {[str(c) for c in candidates]}")
    return candidates


def reverse_lookup(endpoint: ServerEndpoint) -> str:
    """
    Translate a stored data server address into a hostname for display.

    Falls back to the numeric form when the address has no name, as
    getnameinfo(3) does without NI_NAMEREQD.

    Raises:
        ReverseResolutionError: If the lookup fails or the family is unknown
    """
    try:
        host, _ = socket.getnameinfo(endpoint.sockaddr(), 0)
    except (OSError, ValueError, OverflowError, RecordFormatError) as e:
        raise ReverseResolutionError(f"Can't get hostname: {e}") from e
    return host
