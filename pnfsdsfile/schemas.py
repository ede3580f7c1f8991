"""Pydantic schema for the JSON summary output."""

from pydantic import BaseModel

from pnfscommon.record import DsFileRecord


class DsFileSummary(BaseModel):
    """Summary of one data-storage location record."""
    hostname: str
    directory_index: int
    remote_filename: str
    server_address: str | None = None
    family: str
    handle_zeroed: bool
    cleared: bool = False

    @classmethod
    def from_record(cls, record: DsFileRecord, hostname: str, cleared: bool = False) -> "DsFileSummary":
        address = record.server.address
        return cls(
            hostname=hostname,
            directory_index=record.directory_index,
            remote_filename=record.remote_filename,
            server_address=str(address) if address is not None else None,
            family=record.server.family_name,
            handle_zeroed=record.handle_is_zero,
            cleared=cleared,
        )
