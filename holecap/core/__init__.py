"""Implementation package for holecap.

Modules here are internal; import public names from ``holecap`` itself.
"""
