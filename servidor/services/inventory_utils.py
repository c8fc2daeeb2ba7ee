"""Utilidades de montos y conversion de registros de inventario."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any

from servidor.domain.models import Product, Sale, SaleLine
from shared.errors import ServiceError
from shared.protocol import CatalogProduct, SaleRecord, SaleRecordLine

CENTS = Decimal("0.01")


def format_clp(amount: Decimal | float) -> str:
    """Formatea un monto en pesos chilenos sin decimales."""
    rounded_amount = int(round(amount))
    return f"${rounded_amount:,}"


def to_money(value: Any) -> Decimal:
    """Convierte un valor persistido a Decimal con dos decimales."""
    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError) as exc:
        raise ServiceError(f"Monto invalido en almacenamiento: {value!r}") from exc

    if not amount.is_finite():
        raise ServiceError(f"Monto invalido en almacenamiento: {value!r}")
    return amount.quantize(CENTS)


def product_from_dict(item: Any) -> Product:
    """Parsea un producto desde JSON a dataclass tipada."""
    if not isinstance(item, dict):
        raise ServiceError("Cada producto debe ser un objeto JSON.")
    try:
        product = Product(
            id=str(item["id"]).strip(),
            name=str(item["name"]).strip(),
            unit_price=to_money(item["unit_price"]),
            stock=int(item["stock"]),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise ServiceError("Producto invalido en almacenamiento.") from exc

    if not product.id or not product.name:
        raise ServiceError("id y name de producto no pueden estar vacios.")
    return product


def product_to_dict(product: Product) -> dict[str, Any]:
    """Serializa un producto; el precio se guarda como texto."""
    return {
        "id": product.id,
        "name": product.name,
        "unit_price": str(product.unit_price),
        "stock": product.stock,
    }


def sale_from_dict(item: Any) -> Sale:
    """Parsea una venta desde JSON."""
    if not isinstance(item, dict):
        raise ServiceError("Cada venta debe ser un objeto JSON.")
    try:
        raw_lines = item["lines"]
        if not isinstance(raw_lines, list):
            raise ServiceError("lines debe ser una lista en cada venta.")
        lines = [
            SaleLine(
                product_id=str(line["product_id"]),
                name=str(line["name"]),
                unit_price=to_money(line["unit_price"]),
                quantity=int(line["quantity"]),
            )
            for line in raw_lines
        ]
        return Sale(id=str(item["id"]), created_at=str(item["created_at"]), lines=lines)
    except (KeyError, TypeError, ValueError) as exc:
        raise ServiceError("Venta invalida en almacenamiento.") from exc


def sale_to_dict(sale: Sale) -> dict[str, Any]:
    """Serializa una venta con sus lineas."""
    return {
        "id": sale.id,
        "created_at": sale.created_at,
        "lines": [
            {
                "product_id": line.product_id,
                "name": line.name,
                "unit_price": str(line.unit_price),
                "quantity": line.quantity,
            }
            for line in sale.lines
        ],
    }


def to_catalog_product(product: Product) -> CatalogProduct:
    """Construye el snapshot de catalogo que recibe el cliente."""
    return CatalogProduct(
        id=product.id,
        name=product.name,
        unit_price=product.unit_price,
        stock=product.stock,
    )


def to_sale_record(sale: Sale) -> SaleRecord:
    """Construye el DTO de venta registrada."""
    return SaleRecord(
        id=sale.id,
        created_at=sale.created_at,
        lines=tuple(
            SaleRecordLine(
                product_id=line.product_id,
                name=line.name,
                unit_price=line.unit_price,
                quantity=line.quantity,
            )
            for line in sale.lines
        ),
        total=sale.total,
    )
