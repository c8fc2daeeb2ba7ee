"""Servicio de catalogo de productos."""

from __future__ import annotations

import logging
import uuid
from decimal import Decimal

from servidor.domain.models import Product
from servidor.services.inventory_utils import (
    CENTS,
    product_from_dict,
    product_to_dict,
)
from servidor.services.json_store import JsonStore
from shared.errors import ServiceError, ValidationError

LOGGER = logging.getLogger(__name__)


class ProductService:
    """Crea, actualiza, lista y elimina productos del inventario."""

    def __init__(self, store: JsonStore | None = None) -> None:
        self._store = store or JsonStore()

    def list_products(self) -> list[Product]:
        """Retorna productos ordenados por nombre."""
        data = self._store.read()
        products = [product_from_dict(item) for item in data["products"]]
        products.sort(key=lambda product: product.name.casefold())
        return products

    def get_product(self, product_id: str) -> Product:
        """Busca un producto por id."""
        for product in self.list_products():
            if product.id == product_id:
                return product
        raise ServiceError(f"No existe el producto: {product_id}")

    def create_product(self, name: str, unit_price: Decimal, stock: int) -> Product:
        """Crea un producto con id generado."""
        name_clean, price, stock_value = self._validate(name, unit_price, stock)
        product = Product(
            id=uuid.uuid4().hex,
            name=name_clean,
            unit_price=price,
            stock=stock_value,
        )

        data = self._store.read()
        data["products"].append(product_to_dict(product))
        self._store.write(data)

        LOGGER.info("Producto creado: id=%s, name=%s", product.id, product.name)
        return product

    def update_product(
        self,
        product_id: str,
        name: str,
        unit_price: Decimal,
        stock: int,
    ) -> Product:
        """Actualiza nombre, precio y stock de un producto existente."""
        name_clean, price, stock_value = self._validate(name, unit_price, stock)
        data = self._store.read()
        products = [product_from_dict(item) for item in data["products"]]

        for product in products:
            if product.id == product_id:
                product.name = name_clean
                product.unit_price = price
                product.stock = stock_value
                break
        else:
            raise ServiceError(f"No existe el producto: {product_id}")

        data["products"] = [product_to_dict(item) for item in products]
        self._store.write(data)

        LOGGER.info("Producto actualizado: id=%s, stock=%d", product.id, product.stock)
        return product

    def delete_product(self, product_id: str) -> None:
        """Elimina un producto del catalogo."""
        data = self._store.read()
        products = [product_from_dict(item) for item in data["products"]]
        remaining = [product for product in products if product.id != product_id]
        if len(remaining) == len(products):
            raise ServiceError(f"No existe el producto: {product_id}")

        data["products"] = [product_to_dict(product) for product in remaining]
        self._store.write(data)
        LOGGER.info("Producto eliminado: id=%s", product_id)

    @staticmethod
    def _validate(name: str, unit_price: Decimal, stock: int) -> tuple[str, Decimal, int]:
        """Revalida datos de producto en el servidor."""
        name_clean = name.strip()
        if not name_clean:
            raise ValidationError("El nombre es obligatorio.", field="name")

        if not isinstance(unit_price, Decimal) or not unit_price.is_finite():
            raise ValidationError("Precio invalido.", field="unit_price")
        if unit_price < 0:
            raise ValidationError("El precio no puede ser negativo.", field="unit_price")

        if isinstance(stock, bool) or not isinstance(stock, int):
            raise ValidationError("El stock debe ser un numero entero.", field="stock")
        if stock < 0:
            raise ValidationError("El stock no puede ser negativo.", field="stock")

        return name_clean, unit_price.quantize(CENTS), stock
