"""Subdomain resolution with massdns, DNS wildcard filtering and supporting utilities."""

__version__ = "2.1.0"