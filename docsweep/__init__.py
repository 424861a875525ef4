# docsweep/__init__.py
"""
DocSweep package initializer.
Defines the package version; the CLI lives in :mod:`docsweep.cli`.
"""
__version__ = "0.1.0"
