"""Core domain layer - entities, interfaces, services and exceptions."""

from oficina.core import entities, exceptions, interfaces

__all__ = ["entities", "interfaces", "exceptions"]
