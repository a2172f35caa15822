"""Outpost: a minimal HTTP/GraphQL service skeleton."""

__version__ = "0.1.0"
