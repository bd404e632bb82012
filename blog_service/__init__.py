"""
Top-level package for the Blog Service.

All functionality lives in submodules under ``app``.
"""

__all__ = []
