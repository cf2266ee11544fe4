"""CLI entry point for the deq interpreter."""
from __future__ import annotations
import sys
import argparse
import traceback

from . import __version__
from .runtime import Interpreter
from .errors import DeqError
from .diagnostics import emit, error, warning
import deq.runtime_ops  # Install operations


def main(argv: list[str] | None = None):
    parser = argparse.ArgumentParser(
        prog="deq",
        description="Interpreter for the deq double-ended queue language",
    )
    parser.add_argument("file", help="Source file to execute (.deq)")
    parser.add_argument("-d", "--debug", action="store_true",
                        help="Print the deq and call stack after every instruction")
    parser.add_argument("--version", action="version", version=f"deq {__version__}")

    args = parser.parse_args(argv)

    flags = {
        "debug": args.debug,
    }

    run_file(args.file, flags)


def run_file(path: str, flags: dict):
    """Execute a .deq file and exit with the run's status."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            source = f.read()
    except OSError as e:
        emit(error(f"Failed to open file '{path}': {e.strerror or e}"))
        sys.exit(1)
    except UnicodeDecodeError as e:
        emit(error(f"Failed to read file '{path}': not valid UTF-8 (byte {e.start})"))
        sys.exit(1)

    if not source:
        emit(warning(f"File '{path}' is empty"))

    interp = Interpreter(source_path=path, flags=flags)
    try:
        interp.run(source)
    except DeqError as e:
        sys.stdout.flush()
        for diag in e.diagnostics():
            emit(diag)
        sys.exit(1)
    except Exception as e:
        print(f"\n[deq] Internal Error: {e}", file=sys.stderr)
        traceback.print_exc()
        sys.exit(2)

    sys.exit(0)


if __name__ == "__main__":
    main()
