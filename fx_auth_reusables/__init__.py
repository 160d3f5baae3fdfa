"""
Reusable authentication building blocks.

Provides a caching decorator for pluggable credential authenticators,
plus the configuration plumbing (config maps, .env loading) used to build it.
"""
