"""Clients for external services."""

from fba_schema.clients.idserver import IDServerClient, IDServerError

__all__ = ["IDServerClient", "IDServerError"]
