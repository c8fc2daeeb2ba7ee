"""Borrador de venta armado en el cliente antes de confirmarse."""

from __future__ import annotations

import logging
from collections import OrderedDict
from collections.abc import Sequence
from dataclasses import dataclass, replace
from decimal import Decimal

from shared.errors import CommitFailedError, InsufficientStockError, ValidationError
from shared.protocol import CatalogProduct, CreateSaleRequest, SaleItem, SaleRecord

from .gateway import SaleCommitter

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SaleLineItem:
    """Linea del borrador; el precio se fija al agregar el producto."""

    product_id: str
    name: str
    unit_price: Decimal
    quantity: int

    @property
    def subtotal(self) -> Decimal:
        return self.unit_price * self.quantity


class SaleDraft:
    """Mantiene las lineas de una venta pendiente para una sola sesion.

    El catalogo se recibe una vez al abrir la venta y no se vuelve a consultar.
    El tope de stock se verifica contra ese snapshot; el chequeo definitivo lo
    hace el servidor al confirmar.
    """

    def __init__(self, catalog: Sequence[CatalogProduct]) -> None:
        self._catalog: dict[str, CatalogProduct] = {product.id: product for product in catalog}
        self._lines: OrderedDict[str, SaleLineItem] = OrderedDict()
        self._in_flight = False

    @property
    def catalog(self) -> tuple[CatalogProduct, ...]:
        return tuple(self._catalog.values())

    @property
    def line_items(self) -> tuple[SaleLineItem, ...]:
        """Lineas en orden de insercion."""
        return tuple(self._lines.values())

    @property
    def total(self) -> Decimal:
        return self.compute_total()

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    @property
    def can_commit(self) -> bool:
        return self.has_items() and not self._in_flight

    def is_empty(self) -> bool:
        return not self._lines

    def has_items(self) -> bool:
        return bool(self._lines)

    def quantity_of(self, product_id: str) -> int:
        """Cantidad acumulada en el borrador para un producto (0 si no esta)."""
        line = self._lines.get(product_id)
        return line.quantity if line is not None else 0

    def add_line(self, product_id: str, quantity: int) -> SaleLineItem:
        """Agrega o acumula cantidad para un producto respetando su stock."""
        product = self._catalog.get(product_id)
        if product is None:
            raise ValidationError("El producto es obligatorio.", field="product_id")

        existing = self._lines.get(product_id)
        total_requested = (existing.quantity if existing else 0) + quantity
        if total_requested > product.stock:
            raise InsufficientStockError(
                product_id=product_id,
                requested=total_requested,
                available=product.stock,
            )

        if existing is not None:
            line = replace(existing, quantity=total_requested)
        else:
            line = SaleLineItem(
                product_id=product.id,
                name=product.name,
                unit_price=product.unit_price,
                quantity=quantity,
            )
        self._lines[product_id] = line

        LOGGER.debug("Linea de venta: product=%s, cantidad=%d", product_id, line.quantity)
        return line

    def remove_line(self, product_id: str) -> None:
        """Quita la linea del producto; no hace nada si no existe."""
        self._lines.pop(product_id, None)

    def compute_total(self) -> Decimal:
        return sum((line.subtotal for line in self._lines.values()), Decimal("0"))

    def clear(self) -> None:
        self._lines.clear()

    def to_sale_items(self) -> list[SaleItem]:
        """Proyecta el borrador a pares producto/cantidad, sin precios."""
        return [
            SaleItem(product_id=line.product_id, quantity=line.quantity)
            for line in self._lines.values()
        ]

    def commit(self, committer: SaleCommitter) -> SaleRecord:
        """Confirma la venta en una sola llamada al committer.

        Si la llamada falla el borrador queda intacto para reintentar.
        """
        if self.is_empty():
            raise ValidationError("Agrega al menos un producto a la venta.")
        if self._in_flight:
            raise ValidationError("La venta ya se esta procesando.")

        request = CreateSaleRequest(items=self.to_sale_items())
        self._in_flight = True
        try:
            response = committer.create_sale(request)
        except Exception as exc:
            LOGGER.warning("No se pudo confirmar la venta: %s", exc)
            raise CommitFailedError("Error al realizar la venta.") from exc
        finally:
            self._in_flight = False

        self.clear()
        LOGGER.info("Venta confirmada: id=%s, total=%s", response.sale.id, response.sale.total)
        return response.sale
