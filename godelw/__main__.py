"""
Entry point for running godelw as a module.

Usage: python -m godelw [ARGS...]
"""

from godelw.cli.parser import main

if __name__ == "__main__":
    main()
