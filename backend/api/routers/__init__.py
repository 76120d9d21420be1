"""
API routers package
"""
from . import items, system

__all__ = ["items", "system"]
