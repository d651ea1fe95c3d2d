#!/usr/bin/env python3
"""
Main entry point for the graphic packs updater when run as a module.

This allows the package to be executed with: python -m gfxpack_updater
"""

from .cli import main

if __name__ == '__main__':
    main()
