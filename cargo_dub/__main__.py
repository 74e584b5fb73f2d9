#!/usr/bin/env python3
"""
Entry point for running the CLI as: python -m cargo_dub <command>
"""
import sys
from cargo_dub.cli import main

if __name__ == '__main__':
    sys.exit(main())
