#!/usr/bin/env python3
"""
hyper-types entry point.
Allows running as: python3 -m hyper_types <command>
"""

import sys

from hyper_types.cli import main

if __name__ == "__main__":
    sys.exit(main())
