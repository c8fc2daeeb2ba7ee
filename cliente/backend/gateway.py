"""Gateway de comunicacion cliente-servidor."""

from __future__ import annotations

import logging
from typing import Protocol

from servidor.services.inventory_utils import to_catalog_product, to_sale_record
from servidor.services.json_store import JsonStore
from servidor.services.product_service import ProductService
from servidor.services.sale_service import SaleService
from shared.errors import ServiceError, ValidationError
from shared.protocol import (
    CreateSaleRequest,
    CreateSaleResponse,
    DeleteProductRequest,
    DeleteProductResponse,
    ListProductsRequest,
    ListProductsResponse,
    ListSalesRequest,
    ListSalesResponse,
    SaveProductRequest,
    SaveProductResponse,
)

LOGGER = logging.getLogger(__name__)


class CatalogProvider(Protocol):
    """Provee el catalogo de productos; no se modifica desde el borrador."""

    def list_products(self, request: ListProductsRequest) -> ListProductsResponse:
        """Solicita el listado de productos."""


class SaleCommitter(Protocol):
    """Registra una venta de forma autoritativa; puede fallar."""

    def create_sale(self, request: CreateSaleRequest) -> CreateSaleResponse:
        """Solicita el registro de una venta."""


class ServerGateway(CatalogProvider, SaleCommitter, Protocol):
    """Interfaz de acceso del cliente a servicios del servidor."""

    def save_product(self, request: SaveProductRequest) -> SaveProductResponse:
        """Solicita crear o actualizar un producto."""

    def delete_product(self, request: DeleteProductRequest) -> DeleteProductResponse:
        """Solicita eliminar un producto."""

    def list_sales(self, request: ListSalesRequest) -> ListSalesResponse:
        """Solicita el listado de ventas registradas."""


class LocalServerGateway:
    """Implementacion local del gateway usando servicios en proceso."""

    def __init__(
        self,
        product_service: ProductService | None = None,
        sale_service: SaleService | None = None,
        store: JsonStore | None = None,
    ) -> None:
        shared_store = store or JsonStore()
        self._product_service = product_service or ProductService(store=shared_store)
        self._sale_service = sale_service or SaleService(store=shared_store)

    def list_products(self, request: ListProductsRequest) -> ListProductsResponse:
        """Lista el catalogo como snapshots de solo lectura."""
        try:
            products = self._product_service.list_products()
        except (ValidationError, ServiceError):
            raise
        except Exception as exc:
            LOGGER.exception("Fallo inesperado al listar productos.")
            raise ServiceError("No fue posible listar los productos.") from exc

        return ListProductsResponse(
            products=[to_catalog_product(product) for product in products]
        )

    def save_product(self, request: SaveProductRequest) -> SaveProductResponse:
        """Crea o actualiza un producto segun venga o no su id."""
        try:
            if request.product_id is None:
                product = self._product_service.create_product(
                    name=request.name,
                    unit_price=request.unit_price,
                    stock=request.stock,
                )
            else:
                product = self._product_service.update_product(
                    product_id=request.product_id,
                    name=request.name,
                    unit_price=request.unit_price,
                    stock=request.stock,
                )
        except (ValidationError, ServiceError):
            raise
        except Exception as exc:
            LOGGER.exception("Fallo inesperado al guardar producto.")
            raise ServiceError("No fue posible guardar el producto.") from exc

        return SaveProductResponse(product=to_catalog_product(product))

    def delete_product(self, request: DeleteProductRequest) -> DeleteProductResponse:
        """Elimina un producto del catalogo."""
        try:
            self._product_service.delete_product(request.product_id)
        except (ValidationError, ServiceError):
            raise
        except Exception as exc:
            LOGGER.exception("Fallo inesperado al eliminar producto.")
            raise ServiceError("Ocurrio un error al eliminar el producto.") from exc

        return DeleteProductResponse(product_id=request.product_id)

    def create_sale(self, request: CreateSaleRequest) -> CreateSaleResponse:
        """Registra una venta delegando la validacion de stock al servicio."""
        try:
            sale = self._sale_service.create_sale(request.items)
        except (ValidationError, ServiceError):
            raise
        except Exception as exc:
            LOGGER.exception("Fallo inesperado al registrar venta.")
            raise ServiceError("No fue posible registrar la venta.") from exc

        return CreateSaleResponse(sale=to_sale_record(sale))

    def list_sales(self, request: ListSalesRequest) -> ListSalesResponse:
        """Lista ventas registradas."""
        try:
            sales = self._sale_service.list_sales()
        except (ValidationError, ServiceError):
            raise
        except Exception as exc:
            LOGGER.exception("Fallo inesperado al listar ventas.")
            raise ServiceError("No fue posible listar las ventas.") from exc

        return ListSalesResponse(sales=[to_sale_record(sale) for sale in sales])
