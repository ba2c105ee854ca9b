"""
Main entry point for the uci_driver command line.

Usage:
    python -m uci_driver stockfish --moves e2e4 --movetime 500
"""

import sys

from uci_driver.cli import main

if __name__ == "__main__":
    sys.exit(main())
