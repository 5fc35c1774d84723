"""Allows running with: python -m merkle_whitelist"""

import sys

from merkle_whitelist.cli import main

if __name__ == "__main__":
    sys.exit(main())
