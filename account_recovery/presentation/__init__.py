"""Presentation layer - HTTP routers."""
