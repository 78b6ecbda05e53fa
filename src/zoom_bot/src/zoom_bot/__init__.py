"""Zoom Team Chat command bot service."""
