"""
Entry point for running the godelw CLI as a module.

Usage: python -m godelw.cli [ARGS...]
"""

from .parser import main

if __name__ == "__main__":
    main()
