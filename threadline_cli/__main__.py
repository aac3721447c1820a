"""
Module execution entry point.

Allows running with: python -m threadline_cli
"""

import sys
from threadline_cli.main import main

if __name__ == "__main__":
    sys.exit(main())
