#!/usr/bin/env python3
"""
Allows the package to be run as a script.
Example: python -m rustc_cfg show --target x86_64-unknown-linux-gnu
"""
from .cli import main

if __name__ == "__main__":
    main()
