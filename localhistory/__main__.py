"""Entry point for running LocalHistory via: python -m localhistory <command>"""

import sys

from .app.cli import main

if __name__ == "__main__":
    sys.exit(main())
