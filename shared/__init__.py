"""Shared constants used by both scripts and tests.

This package provides a dependency-free location for constants that need to be
shared across packages without creating circular imports.
"""
