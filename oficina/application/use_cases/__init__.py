"""Application use cases."""

from oficina.application.use_cases.register_product import RegisterProductUseCase
from oficina.application.use_cases.update_product import UpdateProductUseCase

__all__ = [
    "RegisterProductUseCase",
    "UpdateProductUseCase",
]
