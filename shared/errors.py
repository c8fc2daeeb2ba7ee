"""Excepciones compartidas del proyecto."""

from __future__ import annotations


class ValidationError(Exception):
    """Error de validacion de datos de entrada."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class ServiceError(Exception):
    """Error en la ejecucion de servicios."""


class InsufficientStockError(ValidationError):
    """La cantidad solicitada supera el stock disponible del producto."""

    def __init__(
        self,
        product_id: str,
        requested: int,
        available: int,
        message: str = "Cantidad no disponible en stock",
    ) -> None:
        super().__init__(message, field="quantity")
        self.product_id = product_id
        self.requested = requested
        self.available = available


class CommitFailedError(ServiceError):
    """Fallo al confirmar una venta; el borrador se conserva para reintentar."""
