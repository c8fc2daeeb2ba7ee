"""Estado derivado de un producto a partir de su stock."""

from __future__ import annotations

from enum import Enum


class ProductStatus(str, Enum):
    """Estado visible de un producto."""

    IN_STOCK = "IN_STOCK"
    OUT_OF_STOCK = "OUT_OF_STOCK"


STATUS_LABELS: dict[ProductStatus, str] = {
    ProductStatus.IN_STOCK: "En stock",
    ProductStatus.OUT_OF_STOCK: "Agotado",
}


def product_status(stock: int) -> ProductStatus:
    """Calcula el estado del producto; nunca se persiste."""
    if stock <= 0:
        return ProductStatus.OUT_OF_STOCK
    return ProductStatus.IN_STOCK


def status_label(status: ProductStatus) -> str:
    """Retorna la etiqueta en espanol para mostrar en tablas."""
    return STATUS_LABELS[status]
