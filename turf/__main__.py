"""Turf CLI entry point.

Allows running via `python -m turf` and provides the console script
defined in `pyproject.toml`.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

from .constants import EditorConstants
from .version import get_version_string


def _usage() -> int:
    print(EditorConstants.USAGE, file=sys.stderr)
    return 2


def main(argv: Optional[list[str]] = None) -> int:
    # Very small arg parsing: --version, --log-file PATH, and the file to edit
    args = list(sys.argv[1:] if argv is None else argv)
    if args and args[0] in ("--version", "-V"):
        print(get_version_string())
        return 0

    log_file = None
    if args and args[0] == "--log-file":
        if len(args) < 2:
            return _usage()
        log_file = args[1]
        args = args[2:]
    if len(args) != 1 or args[0].startswith("--"):
        return _usage()
    filename = args[0]

    if log_file:
        logging.basicConfig(
            filename=log_file,
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s %(message)s",
        )

    # Lazy import to avoid importing UI deps for --version
    from .buffer import TextBuffer, load_lines
    from .errors import FileLoadError, TerminalDriverError
    from .session import EditorSession
    from .settings import load_settings
    from .terminal import TerminalInterface

    # Load before touching the terminal so errors print on a normal screen
    try:
        lines = load_lines(filename)
    except FileLoadError as e:
        print(f"Error loading file: {e}", file=sys.stderr)
        return 1

    session = EditorSession(
        TerminalInterface(),
        TextBuffer(lines),
        settings=load_settings(),
        filename=filename,
    )
    try:
        session.run()
    except TerminalDriverError as e:
        print(f"Terminal error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
