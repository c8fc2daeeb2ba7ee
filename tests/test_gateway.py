"""Tests del gateway local cliente-servidor."""

from __future__ import annotations

import tempfile
import unittest
from decimal import Decimal
from pathlib import Path
from unittest import mock

from cliente.backend.gateway import LocalServerGateway
from servidor.services.json_store import JsonStore
from servidor.services.product_service import ProductService
from shared.errors import InsufficientStockError, ServiceError
from shared.protocol import (
    CreateSaleRequest,
    DeleteProductRequest,
    ListProductsRequest,
    ListSalesRequest,
    SaleItem,
    SaveProductRequest,
)


class LocalServerGatewayTests(unittest.TestCase):
    """Valida mapeo de DTOs y envoltura de errores inesperados."""

    def setUp(self) -> None:
        self._temp_dir = tempfile.TemporaryDirectory()
        self.store = JsonStore(Path(self._temp_dir.name) / "inventario.json")
        self.gateway = LocalServerGateway(store=self.store)

    def tearDown(self) -> None:
        self._temp_dir.cleanup()

    def test_save_creates_then_updates(self) -> None:
        """Sin id crea el producto; con id lo actualiza."""
        created = self.gateway.save_product(
            SaveProductRequest(name="Widget", unit_price=Decimal("10"), stock=5)
        ).product
        updated = self.gateway.save_product(
            SaveProductRequest(
                name="Widget",
                unit_price=Decimal("12"),
                stock=4,
                product_id=created.id,
            )
        ).product

        products = self.gateway.list_products(ListProductsRequest()).products
        self.assertEqual(updated.id, created.id)
        self.assertEqual(len(products), 1)
        self.assertEqual(products[0].unit_price, Decimal("12.00"))
        self.assertEqual(products[0].stock, 4)

    def test_create_sale_returns_record_and_updates_catalog(self) -> None:
        """La venta retorna el registro con total y el catalogo refleja el descuento."""
        product = self.gateway.save_product(
            SaveProductRequest(name="Widget", unit_price=Decimal("10"), stock=5)
        ).product

        response = self.gateway.create_sale(
            CreateSaleRequest(items=[SaleItem(product_id=product.id, quantity=2)])
        )

        self.assertEqual(response.sale.total, Decimal("20.00"))
        self.assertEqual(response.sale.lines[0].name, "Widget")
        stock = self.gateway.list_products(ListProductsRequest()).products[0].stock
        self.assertEqual(stock, 3)
        sales = self.gateway.list_sales(ListSalesRequest()).sales
        self.assertEqual([sale.id for sale in sales], [response.sale.id])

    def test_known_errors_propagate(self) -> None:
        """Errores de dominio se propagan sin envolver."""
        product = self.gateway.save_product(
            SaveProductRequest(name="Widget", unit_price=Decimal("10"), stock=1)
        ).product

        with self.assertRaises(InsufficientStockError):
            self.gateway.create_sale(
                CreateSaleRequest(items=[SaleItem(product_id=product.id, quantity=2)])
            )
        with self.assertRaises(ServiceError):
            self.gateway.delete_product(DeleteProductRequest(product_id="no-existe"))

    def test_unexpected_errors_are_wrapped(self) -> None:
        """Excepciones inesperadas se registran y se envuelven en ServiceError."""
        product_service = mock.create_autospec(ProductService, instance=True)
        product_service.list_products.side_effect = RuntimeError("boom")
        gateway = LocalServerGateway(product_service=product_service, store=self.store)

        with self.assertLogs("cliente.backend.gateway", level="ERROR"):
            with self.assertRaises(ServiceError) as ctx:
                gateway.list_products(ListProductsRequest())

        self.assertIsInstance(ctx.exception.__cause__, RuntimeError)


if __name__ == "__main__":
    unittest.main()
