"""Subdomain name matching, IP range helpers, option parsing, concurrency helpers, DNS wildcard detection and graph export."""

__version__ = "0.1.0"