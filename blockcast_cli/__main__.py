"""
Module execution entry point.

Allows running with: python -m blockcast_cli
"""

import sys
from blockcast_cli.main import main

if __name__ == "__main__":
    sys.exit(main())
