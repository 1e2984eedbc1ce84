"""Renderers for query results."""
