"""Clients for the third-party services the search controller depends on."""
