"""Modelos de dominio de inventario y ventas."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal


@dataclass(slots=True)
class Product:
    """Representa un producto en inventario."""

    id: str
    name: str
    unit_price: Decimal
    stock: int


@dataclass(slots=True)
class SaleLine:
    """Linea de venta con nombre y precio vigentes al momento de vender."""

    product_id: str
    name: str
    unit_price: Decimal
    quantity: int

    @property
    def subtotal(self) -> Decimal:
        return self.unit_price * self.quantity


@dataclass(slots=True)
class Sale:
    """Venta registrada."""

    id: str
    created_at: str
    lines: list[SaleLine] = field(default_factory=list)

    @property
    def total(self) -> Decimal:
        return sum((line.subtotal for line in self.lines), Decimal("0"))
