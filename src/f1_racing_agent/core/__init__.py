"""Core dispatch pipeline — registry, dispatcher, Ergast client, normalizers, and models.

This module is transport-agnostic. It has no dependency on MCP or any server
framework; the FastMCP shell in ``server.py`` drives it through
``RequestDispatcher.dispatch``.
"""
