#!/usr/bin/env python3
"""
Array30 main entry point for running as a module: python3 -m array30
"""

import sys
from array30.cli import main

if __name__ == '__main__':
    sys.exit(main())
