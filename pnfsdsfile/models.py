"""Parsed invocation options for pnfsdsfile."""

from dataclasses import dataclass


@dataclass(frozen=True)
class DsFileOptions:
    """Options built once from argv and passed through the whole run."""

    filename: str
    quiet: bool = False
    ds_hostname: str | None = None
    zero_fh: bool = False
    json_output: bool = False
    debug: bool = False
