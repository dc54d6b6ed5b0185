"""
KeyCheck Module Entry Point
============================

Allows running the KeyCheck CLI via: python -m keycheck
"""

from keycheck.cli import main

if __name__ == "__main__":
    main()
