"""Tests del controlador del cliente."""

from __future__ import annotations

import tempfile
import unittest
from decimal import Decimal
from pathlib import Path
from unittest import mock

from cliente.backend.controller import AppController
from cliente.backend.gateway import LocalServerGateway
from servidor.services.json_store import JsonStore
from shared.errors import CommitFailedError, InsufficientStockError, ServiceError, ValidationError
from shared.status import ProductStatus


class AppControllerTests(unittest.TestCase):
    """Valida el flujo productos -> borrador -> venta."""

    def setUp(self) -> None:
        self._temp_dir = tempfile.TemporaryDirectory()
        self.gateway = LocalServerGateway(
            store=JsonStore(Path(self._temp_dir.name) / "inventario.json")
        )
        self.controller = AppController(gateway=self.gateway)

    def tearDown(self) -> None:
        self._temp_dir.cleanup()

    def test_list_products_includes_derived_status(self) -> None:
        """Cada fila incluye el estado calculado desde el stock."""
        self.controller.on_save_product(None, "Widget", "10", "5")
        self.controller.on_save_product(None, "Agotado", "3", "0")

        rows = {product.name: status for product, status in self.controller.list_products()}

        self.assertEqual(rows["Widget"], ProductStatus.IN_STOCK)
        self.assertEqual(rows["Agotado"], ProductStatus.OUT_OF_STOCK)

    def test_on_save_product_reports_field_error(self) -> None:
        """Una entrada invalida no llega al gateway y se reporta con su campo."""
        with mock.patch.object(self.gateway, "save_product") as save_spy:
            with self.assertRaises(ValidationError) as ctx:
                self.controller.on_save_product(None, "Widget", "diez", "5")

        self.assertEqual(ctx.exception.field, "unit_price")
        save_spy.assert_not_called()

    def test_on_delete_product(self) -> None:
        product = self.controller.on_save_product(None, "Widget", "10", "5")

        self.controller.on_delete_product(product.id)

        self.assertEqual(self.controller.list_products(), [])

    def test_sale_flow_commits_and_updates_stock(self) -> None:
        """Agregar lineas, confirmar y ver stock descontado."""
        product = self.controller.on_save_product(None, "Widget", "10.00", "5")
        draft = self.controller.open_sale_draft()

        self.controller.on_add_sale_line(draft, product.id, "3")
        with self.assertRaises(InsufficientStockError):
            self.controller.on_add_sale_line(draft, product.id, "3")
        self.controller.on_add_sale_line(draft, product.id, "2")
        self.assertEqual(draft.total, Decimal("50.00"))

        record = self.controller.on_finalize_sale(draft)

        self.assertTrue(draft.is_empty())
        self.assertEqual(record.total, Decimal("50.00"))
        [(stored, status)] = self.controller.list_products()
        self.assertEqual(stored.stock, 0)
        self.assertEqual(status, ProductStatus.OUT_OF_STOCK)
        self.assertEqual(len(self.controller.list_sales()), 1)

    def test_add_sale_line_validates_before_draft(self) -> None:
        """Cantidad invalida se rechaza antes de tocar el borrador."""
        product = self.controller.on_save_product(None, "Widget", "10", "5")
        draft = self.controller.open_sale_draft()

        with self.assertRaises(ValidationError) as ctx:
            self.controller.on_add_sale_line(draft, product.id, "0")
        self.assertEqual(ctx.exception.field, "quantity")

        with self.assertRaises(ValidationError) as ctx:
            self.controller.on_add_sale_line(draft, "", "1")
        self.assertEqual(ctx.exception.field, "product_id")
        self.assertTrue(draft.is_empty())

    def test_draft_uses_catalog_snapshot_and_server_rejects_stale_stock(self) -> None:
        """Si el stock cambia tras abrir la venta, el servidor rechaza y el borrador se conserva."""
        product = self.controller.on_save_product(None, "Widget", "10", "5")
        draft = self.controller.open_sale_draft()
        self.controller.on_add_sale_line(draft, product.id, "4")

        self.controller.on_save_product(product.id, "Widget", "10", "1")

        with self.assertRaises(CommitFailedError) as ctx:
            self.controller.on_finalize_sale(draft)

        self.assertIsInstance(ctx.exception.__cause__, InsufficientStockError)
        self.assertEqual(draft.quantity_of(product.id), 4)
        self.assertEqual(self.controller.list_sales(), [])

    def test_catalog_is_fetched_once_per_draft(self) -> None:
        """Abrir la venta consulta el catalogo una vez; agregar lineas no."""
        product = self.controller.on_save_product(None, "Widget", "10", "5")
        with mock.patch.object(
            self.gateway,
            "list_products",
            wraps=self.gateway.list_products,
        ) as spy:
            draft = self.controller.open_sale_draft()
            self.controller.on_add_sale_line(draft, product.id, "1")
            self.controller.on_add_sale_line(draft, product.id, "1")

        self.assertEqual(spy.call_count, 1)

    def test_open_sale_draft_propagates_service_errors(self) -> None:
        with mock.patch.object(
            self.gateway,
            "list_products",
            side_effect=ServiceError("sin catalogo"),
        ):
            with self.assertRaises(ServiceError):
                self.controller.open_sale_draft()

    def test_on_exit_calls_callable(self) -> None:
        quit_app = mock.Mock()
        self.controller.on_exit(quit_app)
        quit_app.assert_called_once_with()


if __name__ == "__main__":
    unittest.main()
