"""Catalogue adapter registry."""

import os

_catalogue_instance = None


def get_catalogue():
    """Return the configured catalogue adapter (singleton).

    Uses the in-memory catalogue by default. Configure via the
    CATALOGUE_ADAPTER environment variable.
    """
    global _catalogue_instance
    if _catalogue_instance is None:
        adapter = os.environ.get("CATALOGUE_ADAPTER", "memory")
        if adapter == "memory":
            from catalogue.product.port import InMemoryCatalogue

            _catalogue_instance = InMemoryCatalogue()
        else:
            raise ValueError(f"Unknown catalogue adapter: {adapter}")
    return _catalogue_instance


def reset_catalogue():
    """Reset the catalogue singleton (useful for testing)."""
    global _catalogue_instance
    _catalogue_instance = None
