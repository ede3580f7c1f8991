"""Custom exception classes for data-server file tools."""


class DsFileError(Exception):
    """
    Base exception class for all pnfsdsfile errors.
    """
    pass


class UsageError(DsFileError):
    """
    Raised when command line arguments are invalid.
    """
    pass


class ResolutionError(DsFileError):
    """
    Raised when the data server name given with -s/--ds cannot be resolved.
    """
    pass


class AttributeReadError(DsFileError):
    """
    Raised when the dsfile extended attribute cannot be read at its full size.
    """
    pass


class PrivilegeError(DsFileError, PermissionError):
    """
    Raised when a handle clear is requested by a non-root caller.
    """
    pass


class AttributeWriteError(DsFileError):
    """
    Raised when the dsfile extended attribute cannot be written back.
    """
    pass


class ReverseResolutionError(DsFileError):
    """
    Raised when the stored data server address has no printable hostname.
    """
    pass


class RecordFormatError(DsFileError):
    """
    Raised when a buffer does not have the dsfile record layout.
    """
    pass
