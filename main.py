#!/usr/bin/env python3
"""Turf - A terminal text viewer and editor.

Usage:
    python main.py FILE

Controls:
    Arrow keys, Home/End, PageUp/PageDown: Move the cursor
    Type to insert text
    Enter: Split the line
    Backspace/Delete: Delete character
    Ctrl-Q: Quit
"""

import sys
from turf.__main__ import main


if __name__ == "__main__":
    sys.exit(main())
