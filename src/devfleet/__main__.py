"""
devfleet SDK CLI entry point.

Usage:
    python -m devfleet devices --application MyFleet
    python -m devfleet device info 7cf02a6
"""

from devfleet.cli import main

if __name__ == "__main__":
    main()
