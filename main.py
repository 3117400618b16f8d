#!/usr/bin/env python3
"""monolog-parse entry point."""

import sys

from monolog_parser.cli import main

if __name__ == "__main__":
    sys.exit(main())
