"""
Entry point for running bestfit as a module.

This allows running the CLI with: python -m bestfit
"""

import sys
from .cli import main

if __name__ == "__main__":
    sys.exit(main())
