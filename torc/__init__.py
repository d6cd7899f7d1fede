"""Manifest-driven dependency manager and build helper for C++ projects."""

__version__ = "0.1.0"