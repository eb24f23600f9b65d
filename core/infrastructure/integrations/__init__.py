"""Integration registry and adapters.

Keep this package import-light: the Gmail adapter pulls in smtplib and is
imported lazily by ``create_default_registry``.
"""

from .registry import BUILTIN_INTEGRATIONS, IntegrationRegistry, create_default_registry

__all__ = ["BUILTIN_INTEGRATIONS", "IntegrationRegistry", "create_default_registry"]
