"""Command line parser for pnfsdsfile."""

import argparse
from typing import Sequence

from pnfscommon.exceptions import UsageError
from pnfsdsfile.constants import PROG_NAME
from pnfsdsfile.models import DsFileOptions


class ParseError(UsageError):
    """Raised when command line parsing fails."""

    pass


class _RaisingArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises instead of printing and exiting with status 2."""

    def error(self, message: str):
        raise ParseError(message)


def _build_parser() -> argparse.ArgumentParser:
    parser = _RaisingArgumentParser(prog=PROG_NAME, add_help=False)
    parser.add_argument("-q", "--quiet", action="store_true")
    parser.add_argument("-s", "--ds", dest="ds_hostname", metavar="dshostname")
    parser.add_argument("-z", "--zerofh", dest="zero_fh", action="store_true")
    parser.add_argument("-j", "--json", dest="json_output", action="store_true")
    parser.add_argument("--debug", action="store_true")
    parser.add_argument("files", nargs="*")
    return parser


def parse_args(argv: Sequence[str]) -> DsFileOptions:
    """Parse command line arguments into a DsFileOptions object.

    Args:
        argv: Arguments without the program name

    Returns:
        DsFileOptions

    Raises:
        ParseError: On an unknown option, a missing option argument, or
            anything other than exactly one file name
    """
    args = _build_parser().parse_args(list(argv))

    if len(args.files) != 1:
        raise ParseError(f"expected exactly one file name, got {len(args.files)}")

    return DsFileOptions(
        filename=args.files[0],
        quiet=args.quiet,
        ds_hostname=args.ds_hostname,
        zero_fh=args.zero_fh,
        json_output=args.json_output,
        debug=args.debug,
    )
