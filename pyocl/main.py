#!/usr/bin/env python3
"""pyocl/main.py — CLI entry-point for OpenCL status diagnostics.

Usage examples
--------------
    # Render the diagnostic a failing call would produce
    python -m pyocl explain -5 clEnqueueReadBuffer --args "buffer_size=1024"

    # Same, as JSON
    python -m pyocl explain -38 clSetKernelArg --format json

    # List every known status code
    python -m pyocl codes

Exit codes
----------
    0   Success.
    1   The explained code is a failure status.
    2   Infrastructure failure (unknown status code, bad arguments).

The module doubles as ``python -m pyocl`` via the companion
``pyocl/__main__.py`` which simply calls :func:`main`.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import textwrap
from typing import Optional, Sequence

from pyocl import __version__
from pyocl.errors import FatalStatusError, docs_url, translate
from pyocl.status import Status

_log = logging.getLogger("pyocl")

# Exit codes ----------------------------------------------------------------

EXIT_OK: int = 0
EXIT_ERROR: int = 1
EXIT_INFRA: int = 2


# ===========================================================================
# Utility helpers
# ===========================================================================

def _configure_logging(verbosity: int) -> None:
    """Set up the root ``pyocl`` logger.

    Parameters
    ----------
    verbosity:
        0 → WARNING, 1 → INFO, 2+ → DEBUG.
    """
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    root = logging.getLogger("pyocl")
    root.setLevel(level)
    # one handler per process, however often main() runs
    if root.handlers:
        return

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s [%(levelname)-5.5s] %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    root.addHandler(handler)


# ===========================================================================
# Sub-command implementations
# ===========================================================================

def cmd_explain(args: argparse.Namespace) -> int:
    """Translate a raw status code and print the resulting diagnostic."""
    try:
        result = translate(args.code, args.function, args.args)
    except FatalStatusError as exc:
        _log.error("%s", exc)
        return EXIT_INFRA

    if args.format == "json":
        if result.is_ok:
            payload = {
                "code": args.code,
                "code_name": Status.CL_SUCCESS.name,
                "operation_name": args.function,
            }
        else:
            failure = result.error.failure
            payload = {
                "code": int(failure.code),
                "code_name": failure.code_name,
                "operation_name": failure.operation_name,
                "operation_args": failure.operation_args,
                "docs_url": docs_url(failure.operation_name),
            }
        print(json.dumps(payload, indent=2))
    elif result.is_ok:
        print(f"{args.function}: {Status.CL_SUCCESS.name}")
    else:
        print(result.error.display())

    return EXIT_OK if result.is_ok else EXIT_ERROR


def cmd_codes(args: argparse.Namespace) -> int:
    """Print every known status code."""
    width = max(len(s.name) for s in Status)
    for status in Status:
        if args.failures_only and status.is_success:
            continue
        print(f"{status.name:<{width}}  {int(status)}")
    return EXIT_OK


# ===========================================================================
# Argument parser
# ===========================================================================

def _build_parser() -> argparse.ArgumentParser:
    """Construct the full CLI argument parser with subcommands."""

    parser = argparse.ArgumentParser(
        prog="pyocl",
        description="Diagnostics for OpenCL status codes.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent("""\
            examples:
              pyocl explain -5 clEnqueueReadBuffer --args buffer_size=1024
              pyocl codes --failures-only
        """),
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (-v info, -vv debug).",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        title="commands",
        metavar="<command>",
    )

    # --- explain -----------------------------------------------------------
    p_explain = subparsers.add_parser(
        "explain",
        help="Render the diagnostic for a status code.",
    )
    p_explain.add_argument("code", type=int, help="Raw cl_int status value.")
    p_explain.add_argument("function", help="OpenCL function that returned it.")
    p_explain.add_argument(
        "--args",
        default="",
        metavar="TEXT",
        help="Description of the call's arguments.",
    )
    p_explain.add_argument(
        "-f", "--format",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text).",
    )
    p_explain.set_defaults(func=cmd_explain)

    # --- codes -------------------------------------------------------------
    p_codes = subparsers.add_parser(
        "codes",
        help="List known status codes.",
    )
    p_codes.add_argument(
        "--failures-only",
        action="store_true",
        help="Omit CL_SUCCESS.",
    )
    p_codes.set_defaults(func=cmd_codes)

    return parser


# ===========================================================================
# Main entry-point
# ===========================================================================

def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the pyocl CLI.

    Parameters
    ----------
    argv:
        Command-line arguments.  ``None`` → ``sys.argv[1:]``.

    Returns
    -------
    int
        Exit code (see module docstring for semantics).
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.verbose)

    # No subcommand given → print help.
    if not hasattr(args, "func"):
        parser.print_help(sys.stderr)
        return EXIT_INFRA

    try:
        return args.func(args)
    except KeyboardInterrupt:
        _log.info("Interrupted by user.")
        return 130
    except Exception as exc:
        _log.error("Unhandled exception: %s", exc, exc_info=True)
        return EXIT_INFRA


if __name__ == "__main__":
    raise SystemExit(main())
