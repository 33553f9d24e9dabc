"""
godelw: installs a pinned godel distribution into a local cache and runs it.
"""

__version__ = "0.1.0"
