"""Servicio de registro de ventas con descuento de stock."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable, Sequence
from datetime import datetime, timezone

from servidor.domain.models import Sale, SaleLine
from servidor.services.inventory_utils import (
    product_from_dict,
    product_to_dict,
    sale_from_dict,
    sale_to_dict,
)
from servidor.services.json_store import JsonStore
from shared.errors import InsufficientStockError, ValidationError
from shared.protocol import SaleItem

LOGGER = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SaleService:
    """Registra ventas de forma atomica sobre el almacenamiento."""

    def __init__(
        self,
        store: JsonStore | None = None,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._store = store or JsonStore()
        self._clock = clock

    def create_sale(self, items: Sequence[SaleItem]) -> Sale:
        """Valida stock vigente, descuenta y registra la venta en una sola escritura.

        Items repetidos para el mismo producto se suman antes de validar. Si
        cualquier item falla no se modifica nada.
        """
        if not items:
            raise ValidationError("La venta debe tener al menos un producto.")

        requested = self._aggregate_items(items)

        data = self._store.read()
        products = [product_from_dict(item) for item in data["products"]]
        products_by_id = {product.id: product for product in products}

        lines: list[SaleLine] = []
        for product_id, quantity in requested.items():
            product = products_by_id.get(product_id)
            if product is None:
                raise ValidationError(
                    f"No existe el producto: {product_id}",
                    field="product_id",
                )
            if quantity > product.stock:
                LOGGER.warning(
                    "Stock insuficiente: product=%s, solicitado=%d, disponible=%d",
                    product_id,
                    quantity,
                    product.stock,
                )
                raise InsufficientStockError(
                    product_id=product_id,
                    requested=quantity,
                    available=product.stock,
                    message=f"Cantidad no disponible en stock para {product.name}",
                )
            lines.append(
                SaleLine(
                    product_id=product.id,
                    name=product.name,
                    unit_price=product.unit_price,
                    quantity=quantity,
                )
            )

        for line in lines:
            products_by_id[line.product_id].stock -= line.quantity

        sale = Sale(
            id=uuid.uuid4().hex,
            created_at=self._clock().isoformat(),
            lines=lines,
        )
        data["products"] = [product_to_dict(product) for product in products]
        data["sales"].append(sale_to_dict(sale))
        self._store.write(data)

        LOGGER.info(
            "Venta registrada: id=%s, lineas=%d, total=%s",
            sale.id,
            len(sale.lines),
            sale.total,
        )
        return sale

    def list_sales(self) -> list[Sale]:
        """Retorna ventas registradas, mas recientes primero."""
        data = self._store.read()
        sales = [sale_from_dict(item) for item in data["sales"]]
        sales.sort(key=lambda sale: sale.created_at, reverse=True)
        return sales

    @staticmethod
    def _aggregate_items(items: Sequence[SaleItem]) -> dict[str, int]:
        """Suma cantidades por producto preservando el orden de llegada."""
        requested: dict[str, int] = {}
        for item in items:
            if isinstance(item.quantity, bool) or not isinstance(item.quantity, int):
                raise ValidationError("La cantidad debe ser un numero entero.", field="quantity")
            if item.quantity <= 0:
                raise ValidationError("La cantidad debe ser mayor a 0.", field="quantity")
            requested[item.product_id] = requested.get(item.product_id, 0) + item.quantity
        return requested
