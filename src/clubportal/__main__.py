"""
Main entry point for the club portal.
"""

import sys
from clubportal.cli import main

if __name__ == "__main__":
    sys.exit(main())
