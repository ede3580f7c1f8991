"""Layout constants for the pnfsd.dsfile extended attribute (struct pnfsdsfile)."""

import socket

# fhandle_t: fsid (2 x int32) + fid (u16 len, u16 data0, 16 bytes data)
FHANDLE_SIZE: int = 28
PNFS_FILENAME_LEN: int = 2 * FHANDLE_SIZE

SOCKADDR_IN_SIZE: int = 16
SOCKADDR_IN6_SIZE: int = 28
SOCKADDR_UNION_SIZE: int = max(SOCKADDR_IN_SIZE, SOCKADDR_IN6_SIZE)

# fh, dir, sockaddr union, filename + NUL, 3 bytes tail padding
DSFILE_FMT: str = f"={FHANDLE_SIZE}sI{SOCKADDR_UNION_SIZE}s{PNFS_FILENAME_LEN + 1}s3x"
DSFILE_SIZE: int = 120

# Family tags as stored on disk by the MDS (FreeBSD values)
DSF_AF_UNSPEC: int = 0
DSF_AF_INET: int = 2
DSF_AF_INET6: int = 28

FAMILY_TO_SOCKET = {
    DSF_AF_INET: socket.AF_INET,
    DSF_AF_INET6: socket.AF_INET6,
}

DSFILE_ATTR_LABEL: str = "pnfsd.dsfile"
DEFAULT_XATTR_NAME: str = f"system.{DSFILE_ATTR_LABEL}"
