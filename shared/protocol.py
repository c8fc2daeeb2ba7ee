"""DTOs del protocolo cliente-servidor."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal


@dataclass(frozen=True, slots=True)
class CatalogProduct:
    """Snapshot de solo lectura de un producto del catalogo."""

    id: str
    name: str
    unit_price: Decimal
    stock: int


@dataclass(frozen=True, slots=True)
class SaleItem:
    """Par producto/cantidad enviado al confirmar una venta."""

    product_id: str
    quantity: int


@dataclass(frozen=True, slots=True)
class SaleRecordLine:
    """Linea de una venta registrada, con precio fijado por el servidor."""

    product_id: str
    name: str
    unit_price: Decimal
    quantity: int


@dataclass(frozen=True, slots=True)
class SaleRecord:
    """Venta registrada por el servidor."""

    id: str
    created_at: str
    lines: tuple[SaleRecordLine, ...]
    total: Decimal


@dataclass(slots=True)
class ListProductsRequest:
    """Solicitud para listar el catalogo de productos."""


@dataclass(slots=True)
class ListProductsResponse:
    """Respuesta con los productos del catalogo."""

    products: list[CatalogProduct] = field(default_factory=list)


@dataclass(slots=True)
class SaveProductRequest:
    """Solicitud para crear (sin id) o actualizar (con id) un producto."""

    name: str
    unit_price: Decimal
    stock: int
    product_id: str | None = None


@dataclass(slots=True)
class SaveProductResponse:
    """Respuesta con el producto persistido."""

    product: CatalogProduct


@dataclass(slots=True)
class DeleteProductRequest:
    """Solicitud para eliminar un producto."""

    product_id: str


@dataclass(slots=True)
class DeleteProductResponse:
    """Respuesta de eliminacion de producto."""

    product_id: str


@dataclass(slots=True)
class CreateSaleRequest:
    """Solicitud para registrar una venta con sus items."""

    items: list[SaleItem]


@dataclass(slots=True)
class CreateSaleResponse:
    """Respuesta con la venta registrada."""

    sale: SaleRecord


@dataclass(slots=True)
class ListSalesRequest:
    """Solicitud para listar ventas registradas."""


@dataclass(slots=True)
class ListSalesResponse:
    """Respuesta con ventas registradas, mas recientes primero."""

    sales: list[SaleRecord] = field(default_factory=list)
