"""Operation sequence for one pnfsdsfile invocation."""

import os
from typing import Optional

from pnfscommon import dsfile
from pnfscommon.logging_config import get_logger
from pnfscommon.resolver import resolve_server, reverse_lookup
from pnfsdsfile import config
from pnfsdsfile.models import DsFileOptions
from pnfsdsfile.schemas import DsFileSummary

logger = get_logger(__name__)


def is_privileged() -> bool:
    """Return True when running with effective uid 0."""
    return os.geteuid() == 0


def handle_dsfile(options: DsFileOptions, privileged: Optional[bool] = None) -> Optional[str]:
    """
    Run load -> [clear] -> [describe] for one file.

    The -s/--ds name is resolved first, whether or not -z was given, so a
    bad name fails before the attribute is touched.

    Args:
        options: Parsed command line options
        privileged: Override for the effective-uid check (testing)

    Returns:
        The line to print, or None in quiet mode

    Raises:
        DsFileError: Any failing step; nothing after it runs
    """
    candidates = resolve_server(options.ds_hostname)

    record = dsfile.load(options.filename, config.XATTR_NAME)

    cleared = False
    if options.zero_fh:
        if privileged is None:
            privileged = is_privileged()
        record, cleared = dsfile.maybe_clear(
            options.filename, record, candidates, privileged, config.XATTR_NAME
        )

    if options.quiet:
        return None

    if options.json_output:
        hostname = reverse_lookup(record.server)
        return DsFileSummary.from_record(record, hostname, cleared=cleared).model_dump_json()

    return dsfile.describe(record)
