"""
API routers package.
"""

from . import questions

__all__ = ["questions"]
