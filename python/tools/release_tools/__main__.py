#!/usr/bin/env python3
"""
Allows the package to be run as a script.
Example: python -m release_tools encode --build 1
"""
from .cli import main

if __name__ == "__main__":
    main()
