"""
Entry point for running the branch identifier as a module.

Usage:
    python -m kcovbranch file.c
    python -m kcovbranch --annotate file.c
"""

import sys
from kcovbranch.cli import main

if __name__ == "__main__":
    sys.exit(main())
