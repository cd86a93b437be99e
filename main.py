#!/usr/bin/env python3
"""
PathForge - A Python Recursive Path Tracer

Main entry point for rendering scenes.
"""

import sys

from pathforge.cli import main


if __name__ == '__main__':
    sys.exit(main())
