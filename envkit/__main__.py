"""Entry point for running envkit as a module: python -m envkit"""

import sys

from envkit.cli import main

if __name__ == "__main__":
    sys.exit(main())
