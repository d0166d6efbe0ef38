"""Oficina back-office API: inventory, work orders, receivables and staff accounts."""

__version__ = "1.0.0"
