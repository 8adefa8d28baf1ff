"""
HTTP surface for the exporter
"""

from .server import APIServer

__all__ = ["APIServer"]
