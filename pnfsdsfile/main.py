"""CLI entry point."""

import sys
from typing import Optional, Sequence

from pnfscommon.exceptions import DsFileError, UsageError
from pnfscommon.logging_config import setup_logging
from pnfsdsfile import config
from pnfsdsfile.commands import handle_dsfile
from pnfsdsfile.constants import EXIT_FAILURE, EXIT_SUCCESS, PROG_NAME, USAGE
from pnfsdsfile.parser import parse_args


def run(argv: Optional[Sequence[str]] = None) -> int:
    """Parse argv, run the command and return the exit status."""
    if argv is None:
        argv = sys.argv[1:]

    try:
        options = parse_args(argv)
    except UsageError:
        print(USAGE, file=sys.stderr)
        return EXIT_FAILURE

    log_level = 'DEBUG' if options.debug else config.LOG_LEVEL
    logger = setup_logging(PROG_NAME, log_level=log_level)
    setup_logging('pnfscommon', log_level=log_level)

    try:
        output = handle_dsfile(options)
    except DsFileError as e:
        print(f"{PROG_NAME}: {e}", file=sys.stderr)
        return EXIT_FAILURE
    except Exception as e:
        logger.error(f"Unexpected error: {e}", exc_info=True)
        raise

    if output is not None:
        print(output)
    return EXIT_SUCCESS


def main() -> None:
    """Entry point for the pnfsdsfile command."""
    sys.exit(run())


if __name__ == "__main__":
    main()
