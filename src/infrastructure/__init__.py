"""Infrastructure adapters (HTTP, database, settings, logging)."""
