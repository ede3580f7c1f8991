"""Binary layout of the pnfsd.dsfile extended attribute.

The metadata server stores one fixed-size record per exported file:

    struct pnfsdsfile {
        fhandle_t   dsf_fh;
        uint32_t    dsf_dir;
        union {
            struct sockaddr_in  sin;
            struct sockaddr_in6 sin6;
        } dsf_nam;
        char        dsf_filename[PNFS_FILENAME_LEN + 1];
    };

Integers are in host byte order except inside the socket address, which
keeps the usual network order for port, flowinfo and address.
"""

import ipaddress
import socket
import struct
from dataclasses import dataclass, field, replace
from typing import ClassVar, Optional

from pnfscommon.constants import (
    DSFILE_FMT,
    DSFILE_SIZE,
    DSF_AF_INET,
    DSF_AF_INET6,
    DSF_AF_UNSPEC,
    FHANDLE_SIZE,
    PNFS_FILENAME_LEN,
    SOCKADDR_IN6_SIZE,
    SOCKADDR_IN_SIZE,
    SOCKADDR_UNION_SIZE,
)
from pnfscommon.exceptions import RecordFormatError

IPAddress = ipaddress.IPv4Address | ipaddress.IPv6Address

SOCKADDR_IN_FMT = "!BBH4s8x"
SOCKADDR_IN6_FMT = "!BBHI16s"
SCOPE_ID_FMT = "=I"

ZERO_FILE_HANDLE = bytes(FHANDLE_SIZE)

assert struct.calcsize(DSFILE_FMT) == DSFILE_SIZE


@dataclass(frozen=True)
class Inet4Endpoint:
    """IPv4 data server address (struct sockaddr_in)."""

    address: ipaddress.IPv4Address
    port: int = 0
    family: ClassVar[int] = socket.AF_INET
    family_name: ClassVar[str] = "inet"

    def sockaddr(self) -> tuple:
        return (str(self.address), self.port)

    def matches(self, candidate: IPAddress) -> bool:
        return isinstance(candidate, ipaddress.IPv4Address) and candidate.packed == self.address.packed


@dataclass(frozen=True)
class Inet6Endpoint:
    """IPv6 data server address (struct sockaddr_in6).

    Matching compares the 128-bit address only; the scope id is kept for
    reverse lookups but never takes part in a comparison.
    """

    address: ipaddress.IPv6Address
    port: int = 0
    flowinfo: int = 0
    scope_id: int = 0
    family: ClassVar[int] = socket.AF_INET6
    family_name: ClassVar[str] = "inet6"

    def sockaddr(self) -> tuple:
        # stored flowinfo is a full u32; getnameinfo only takes 20 bits and ignores it
        return (str(self.address), self.port, 0, self.scope_id)

    def matches(self, candidate: IPAddress) -> bool:
        return isinstance(candidate, ipaddress.IPv6Address) and candidate.packed == self.address.packed


@dataclass(frozen=True)
class UnspecEndpoint:
    """Address with a family tag this tool does not know. Never matches."""

    family_tag: int = DSF_AF_UNSPEC
    family: ClassVar[int] = socket.AF_UNSPEC
    family_name: ClassVar[str] = "unspec"

    @property
    def address(self) -> None:
        return None

    def sockaddr(self) -> tuple:
        raise RecordFormatError(f"Unsupported address family {self.family_tag}")

    def matches(self, candidate: IPAddress) -> bool:
        return False


ServerEndpoint = Inet4Endpoint | Inet6Endpoint | UnspecEndpoint


@dataclass(frozen=True)
class DsFileRecord:
    """
    Decoded data-storage location record.

    Attributes:
        file_handle: Opaque handle of the file on the data server (all zero when unset)
        directory_index: Which dsNN directory on the data server holds the file
        server: Data server address, discriminated by the stored family tag
        remote_filename: File name inside the dsNN directory
        raw: Bytes the record was decoded from, if any
    """

    file_handle: bytes
    directory_index: int
    server: ServerEndpoint
    remote_filename: str
    raw: Optional[bytes] = field(default=None, repr=False, compare=False)

    @property
    def handle_is_zero(self) -> bool:
        return self.file_handle == ZERO_FILE_HANDLE

    def with_zeroed_handle(self) -> "DsFileRecord":
        """Return a copy whose file handle is zeroed and whose other bytes are unchanged."""
        return replace(self, file_handle=ZERO_FILE_HANDLE)


def decode_sockaddr(data: bytes) -> ServerEndpoint:
    """
    Decode the dsf_nam union.

    The family byte alone selects the sub-layout; the rest of the buffer is
    not inspected to guess it.

    Args:
        data: The SOCKADDR_UNION_SIZE bytes of the union

    Returns:
        Inet4Endpoint, Inet6Endpoint or UnspecEndpoint

    Raises:
        RecordFormatError: If data has the wrong length
    """
    if len(data) != SOCKADDR_UNION_SIZE:
        raise RecordFormatError(f"Socket address is {len(data)} bytes, expected {SOCKADDR_UNION_SIZE}")

    family_tag = data[1]
    if family_tag == DSF_AF_INET:
        _, _, port, addr = struct.unpack_from(SOCKADDR_IN_FMT, data)
        return Inet4Endpoint(address=ipaddress.IPv4Address(addr), port=port)
    if family_tag == DSF_AF_INET6:
        _, _, port, flowinfo, addr = struct.unpack_from(SOCKADDR_IN6_FMT, data)
        (scope_id,) = struct.unpack_from(SCOPE_ID_FMT, data, SOCKADDR_IN6_SIZE - 4)
        return Inet6Endpoint(
            address=ipaddress.IPv6Address(addr),
            port=port,
            flowinfo=flowinfo,
            scope_id=scope_id,
        )
    return UnspecEndpoint(family_tag=family_tag)


def encode_sockaddr(endpoint: ServerEndpoint) -> bytes:
    """Encode an endpoint into the zero-padded dsf_nam union."""
    if isinstance(endpoint, Inet4Endpoint):
        data = struct.pack(SOCKADDR_IN_FMT, SOCKADDR_IN_SIZE, DSF_AF_INET, endpoint.port, endpoint.address.packed)
    elif isinstance(endpoint, Inet6Endpoint):
        data = struct.pack(
            SOCKADDR_IN6_FMT,
            SOCKADDR_IN6_SIZE,
            DSF_AF_INET6,
            endpoint.port,
            endpoint.flowinfo,
            endpoint.address.packed,
        ) + struct.pack(SCOPE_ID_FMT, endpoint.scope_id)
    else:
        data = struct.pack("BB", 0, endpoint.family_tag)
    return data.ljust(SOCKADDR_UNION_SIZE, b"\0")


def decode_record(data: bytes) -> DsFileRecord:
    """
    Decode a pnfsd.dsfile attribute value.

    Args:
        data: The attribute value (must be exactly DSFILE_SIZE bytes)

    Returns:
        DsFileRecord keeping a copy of data for byte-exact re-encoding

    Raises:
        RecordFormatError: If data is not DSFILE_SIZE bytes long
    """
    if len(data) != DSFILE_SIZE:
        raise RecordFormatError(f"Record is {len(data)} bytes, expected {DSFILE_SIZE}")

    fh, dir_index, nam, filename = struct.unpack(DSFILE_FMT, data)
    return DsFileRecord(
        file_handle=fh,
        directory_index=dir_index,
        server=decode_sockaddr(nam),
        remote_filename=filename.split(b"\0", 1)[0].decode("utf-8", errors="replace"),
        raw=bytes(data),
    )


def encode_record(record: DsFileRecord) -> bytes:
    """
    Encode a record into its attribute value.

    A record that came from decode_record is re-encoded from its raw bytes
    with only the file handle spliced in, so padding and unused union bytes
    survive untouched.

    Raises:
        RecordFormatError: If a field does not fit its fixed width
    """
    if len(record.file_handle) != FHANDLE_SIZE:
        raise RecordFormatError(f"File handle is {len(record.file_handle)} bytes, expected {FHANDLE_SIZE}")

    if record.raw is not None:
        return record.file_handle + record.raw[FHANDLE_SIZE:]

    filename = record.remote_filename.encode("utf-8")
    if len(filename) > PNFS_FILENAME_LEN:
        raise RecordFormatError(f"Remote filename longer than {PNFS_FILENAME_LEN} bytes")

    return struct.pack(
        DSFILE_FMT,
        record.file_handle,
        record.directory_index,
        encode_sockaddr(record.server),
        filename,
    )
