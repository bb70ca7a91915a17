"""
Main entry point for running mediadiff from a source checkout.

Equivalent to `python -m mediadiff` or the installed `mediadiff` command.
"""

import sys

from mediadiff.main import main


if __name__ == "__main__":
    sys.exit(main())
