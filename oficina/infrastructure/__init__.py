"""Infrastructure layer implementations."""

from oficina.infrastructure import storage

__all__ = ["storage"]
