"""
Entry point for running jobpulse.scripts as a module.

This allows the trends CLI to be run as:
    python -m jobpulse.scripts --input export.xlsx --out ./out
"""

import sys
from jobpulse.scripts.trends_run import main

if __name__ == "__main__":
    sys.exit(main())
