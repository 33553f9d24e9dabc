"""
godelw CLI module.

This module provides the command-line interface for godelw.
"""

from .parser import CLI, WrapperContext, main

__all__ = ["CLI", "WrapperContext", "main"]
