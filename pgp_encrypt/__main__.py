"""
Main entry point for running pgp_encrypt as a module.

Usage:
    python -m pgp_encrypt -f INPUT_DIR -o OUTPUT_DIR -k KEY_FILE
"""

from .cli import main
import sys

if __name__ == "__main__":
    sys.exit(main())
