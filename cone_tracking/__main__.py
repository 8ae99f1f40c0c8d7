"""
Main entry point for the cone tracking package.

Allows running: python -m cone_tracking <command>
"""

import sys
from cone_tracking.cli import main

if __name__ == "__main__":
    sys.exit(main())
