"""CLI constants for pnfsdsfile."""

PROG_NAME = "pnfsdsfile"

USAGE = f"{PROG_NAME} [-q/--quiet] [-z/--zerofh] [-s/--ds <dshostname>] <filename>"

EXIT_SUCCESS = 0
EXIT_FAILURE = 1
