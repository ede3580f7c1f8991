"""Read, clear and describe the data-storage location record of an MDS file."""

import os
from typing import Sequence, Tuple

from pnfscommon.constants import DEFAULT_XATTR_NAME, DSFILE_ATTR_LABEL, DSFILE_SIZE
from pnfscommon.exceptions import (
    AttributeReadError,
    AttributeWriteError,
    PrivilegeError,
    RecordFormatError,
)
from pnfscommon.logging_config import get_logger
from pnfscommon.record import DsFileRecord, IPAddress, decode_record, encode_record
from pnfscommon.resolver import reverse_lookup

logger = get_logger(__name__)


def load(path: str, attr_name: str = DEFAULT_XATTR_NAME) -> DsFileRecord:
    """
    Read the location record stored on a file.

    Args:
        path: File in a local file system exported for pNFS
        attr_name: Extended attribute holding the record

    Returns:
        Decoded DsFileRecord

    Raises:
        AttributeReadError: If the attribute cannot be read or is not DSFILE_SIZE bytes
    """
    try:
        data = os.getxattr(path, attr_name)
    except OSError as e:
        raise AttributeReadError(f"Can't get extattr {DSFILE_ATTR_LABEL}: {e.strerror or e}") from e

    if len(data) != DSFILE_SIZE:
        raise AttributeReadError(
            f"Can't get extattr {DSFILE_ATTR_LABEL}: size {len(data)}, expected {DSFILE_SIZE}"
        )

    record = decode_record(data)
    logger.debug(
        f"Loaded {path}: dir={record.directory_index} file={record.remote_filename} "
        f"server={record.server} fh={record.file_handle.hex()}"
    )
    return record


def store(path: str, record: DsFileRecord, attr_name: str = DEFAULT_XATTR_NAME) -> None:
    """
    Replace the whole attribute value with the encoded record.

    Raises:
        AttributeWriteError: If the record cannot be encoded or written
    """
    try:
        data = encode_record(record)
    except RecordFormatError as e:
        raise AttributeWriteError(f"Can't set {DSFILE_ATTR_LABEL}: {e}") from e

    if len(data) != DSFILE_SIZE:
        raise AttributeWriteError(f"Can't set {DSFILE_ATTR_LABEL}: size {len(data)}, expected {DSFILE_SIZE}")

    try:
        os.setxattr(path, attr_name, data)
    except OSError as e:
        raise AttributeWriteError(f"Can't set {DSFILE_ATTR_LABEL}: {e.strerror or e}") from e


def find_match(record: DsFileRecord, candidates: Sequence[IPAddress]) -> bool:
    """
    Decide whether a clear applies to this record.

    An empty candidate list means no server filter was given and matches
    every record. Otherwise the candidates are scanned in order and the first
    one with the record's family and address wins.
    """
    if not candidates:
        return True
    for candidate in candidates:
        if record.server.matches(candidate):
            logger.debug(f"Server filter matched {candidate}")
            return True
    return False


def maybe_clear(
    path: str,
    record: DsFileRecord,
    candidates: Sequence[IPAddress],
    privileged: bool,
    attr_name: str = DEFAULT_XATTR_NAME,
) -> Tuple[DsFileRecord, bool]:
    """
    Zero the record's file handle if the server filter matches.

    Args:
        path: File the record was loaded from
        record: Record returned by load()
        candidates: Addresses from resolve_server(); empty for no filter
        privileged: Whether the caller runs with effective uid 0
        attr_name: Extended attribute holding the record

    Returns:
        Tuple of (record now on disk, whether it was rewritten)

    Raises:
        PrivilegeError: If privileged is False, before anything is written
        AttributeWriteError: If the rewrite fails
    """
    if not privileged:
        raise PrivilegeError("Must be root/su to zerofh")

    if not find_match(record, candidates):
        logger.info(f"{path}: data server {record.server.address} not in filter, left unchanged")
        return record, False

    cleared = record.with_zeroed_handle()
    store(path, cleared, attr_name)
    logger.info(f"{path}: file handle zeroed")
    return cleared, True


def describe(record: DsFileRecord) -> str:
    """
    Format the record as '<hostname>\\tds<dir>/<filename>'.

    Raises:
        ReverseResolutionError: If the server address has no printable name
    """
    hostname = reverse_lookup(record.server)
    return f"{hostname}\tds{record.directory_index}/{record.remote_filename}"
