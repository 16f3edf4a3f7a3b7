"""Entry point for ``python -m alloylsp``."""

import sys

from alloylsp.cli import run

if __name__ == "__main__":
    sys.exit(run())
