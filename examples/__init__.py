"""Example scripts for strategizer.

These demonstrate engine usage against the in-memory host and are not part
of the core API.
"""
