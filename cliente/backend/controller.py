"""Controlador principal del cliente."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from shared.errors import ValidationError
from shared.protocol import (
    CatalogProduct,
    DeleteProductRequest,
    ListProductsRequest,
    ListSalesRequest,
    SaleRecord,
    SaveProductRequest,
)
from shared.status import ProductStatus, product_status

from .gateway import ServerGateway
from .sale_draft import SaleDraft, SaleLineItem
from .validators import FieldError, validate_product_input, validate_sale_line_input

if TYPE_CHECKING:
    from PyQt6.QtWidgets import QApplication

LOGGER = logging.getLogger(__name__)


class AppController:
    """Coordina acciones de UI y servicios de negocio."""

    def __init__(self, gateway: ServerGateway) -> None:
        self._gateway = gateway

    def on_open_products(self) -> None:
        """Registra la accion para abrir la pantalla de productos."""
        LOGGER.info("Accion ejecutada: abrir pantalla de productos")

    def on_open_sales(self) -> None:
        """Registra la accion para abrir la pantalla de ventas."""
        LOGGER.info("Accion ejecutada: abrir pantalla de ventas")

    def list_products(self) -> list[tuple[CatalogProduct, ProductStatus]]:
        """Lista productos junto a su estado calculado al momento de leer."""
        response = self._gateway.list_products(ListProductsRequest())
        return [(product, product_status(product.stock)) for product in response.products]

    def on_save_product(
        self,
        product_id: str | None,
        name: str,
        raw_price: object,
        raw_stock: object,
    ) -> CatalogProduct:
        """Valida el formulario y crea o actualiza el producto."""
        result = validate_product_input(name, raw_price, raw_stock)
        if isinstance(result, FieldError):
            raise ValidationError(result.message, field=result.field)

        response = self._gateway.save_product(
            SaveProductRequest(
                name=result.name,
                unit_price=result.unit_price,
                stock=result.stock,
                product_id=product_id,
            )
        )
        LOGGER.info(
            "Producto guardado desde UI: id=%s, name=%s",
            response.product.id,
            response.product.name,
        )
        return response.product

    def on_delete_product(self, product_id: str) -> None:
        """Elimina un producto ya confirmado por el usuario."""
        self._gateway.delete_product(DeleteProductRequest(product_id=product_id))
        LOGGER.info("Producto eliminado desde UI: id=%s", product_id)

    def open_sale_draft(self) -> SaleDraft:
        """Carga el catalogo una vez y retorna un borrador vacio."""
        response = self._gateway.list_products(ListProductsRequest())
        LOGGER.info("Borrador de venta abierto con %d productos", len(response.products))
        return SaleDraft(catalog=response.products)

    def on_add_sale_line(
        self,
        draft: SaleDraft,
        product_id: str | None,
        raw_quantity: object,
    ) -> SaleLineItem:
        """Valida la entrada del formulario y la agrega al borrador."""
        result = validate_sale_line_input(product_id, raw_quantity)
        if isinstance(result, FieldError):
            raise ValidationError(result.message, field=result.field)

        return draft.add_line(result.product_id, result.quantity)

    def on_remove_sale_line(self, draft: SaleDraft, product_id: str) -> None:
        """Quita un producto del borrador."""
        draft.remove_line(product_id)

    def on_finalize_sale(self, draft: SaleDraft) -> SaleRecord:
        """Confirma el borrador contra el servidor."""
        return draft.commit(self._gateway)

    def list_sales(self) -> list[SaleRecord]:
        """Lista ventas registradas."""
        return self._gateway.list_sales(ListSalesRequest()).sales

    def on_exit(
        self,
        app: QApplication | Callable[[], None] | None,
    ) -> None:
        """Cierra la aplicacion."""
        LOGGER.info("Accion ejecutada: salir")

        if callable(app):
            app()
            return

        if app is not None:
            app.quit()
