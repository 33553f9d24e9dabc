"""
Test fixtures for godelw tests.
"""
