"""Tests del servicio de productos y su almacenamiento JSON."""

from __future__ import annotations

import json
import tempfile
import unittest
from decimal import Decimal
from pathlib import Path

from servidor.services.json_store import JsonStore
from servidor.services.product_service import ProductService
from shared.errors import ServiceError, ValidationError


class ProductServiceTests(unittest.TestCase):
    """Valida alta, edicion, listado y eliminacion de productos."""

    def setUp(self) -> None:
        self._temp_dir = tempfile.TemporaryDirectory()
        self.store_path = Path(self._temp_dir.name) / "data" / "inventario.json"
        self.service = ProductService(store=JsonStore(self.store_path))

    def tearDown(self) -> None:
        self._temp_dir.cleanup()

    def test_list_products_without_file_is_empty(self) -> None:
        """Sin archivo de almacenamiento el catalogo esta vacio."""
        self.assertEqual(self.service.list_products(), [])
        self.assertFalse(self.store_path.exists())

    def test_create_product_persists_price_as_text(self) -> None:
        """El precio se guarda como texto con dos decimales."""
        product = self.service.create_product(" Monitor ", Decimal("4990.5"), 3)

        data = json.loads(self.store_path.read_text(encoding="utf-8"))
        self.assertEqual(product.name, "Monitor")
        self.assertEqual(
            data["products"],
            [{"id": product.id, "name": "Monitor", "unit_price": "4990.50", "stock": 3}],
        )
        self.assertEqual(data["sales"], [])

    def test_list_products_sorted_by_name(self) -> None:
        """El listado se ordena por nombre sin distinguir mayusculas."""
        self.service.create_product("teclado", Decimal("10"), 1)
        self.service.create_product("Audifonos", Decimal("20"), 0)
        self.service.create_product("Mouse", Decimal("5"), 2)

        names = [product.name for product in self.service.list_products()]
        self.assertEqual(names, ["Audifonos", "Mouse", "teclado"])

    def test_update_product(self) -> None:
        """Debe actualizar nombre, precio y stock de un producto existente."""
        product = self.service.create_product("Mouse", Decimal("5"), 2)

        updated = self.service.update_product(product.id, "Mouse Pro", Decimal("7.25"), 0)

        self.assertEqual(updated.id, product.id)
        stored = self.service.get_product(product.id)
        self.assertEqual(stored.name, "Mouse Pro")
        self.assertEqual(stored.unit_price, Decimal("7.25"))
        self.assertEqual(stored.stock, 0)

    def test_update_unknown_product_fails(self) -> None:
        with self.assertRaises(ServiceError):
            self.service.update_product("no-existe", "X", Decimal("1"), 1)

    def test_delete_product(self) -> None:
        """Debe eliminar solo el producto indicado."""
        keep = self.service.create_product("Mouse", Decimal("5"), 2)
        remove = self.service.create_product("Teclado", Decimal("9"), 1)

        self.service.delete_product(remove.id)

        self.assertEqual([product.id for product in self.service.list_products()], [keep.id])
        with self.assertRaises(ServiceError):
            self.service.delete_product(remove.id)

    def test_server_side_validation(self) -> None:
        """El servicio revalida nombre, precio y stock."""
        cases = (
            (("  ", Decimal("1"), 1), "name"),
            (("X", Decimal("-1"), 1), "unit_price"),
            (("X", 1.5, 1), "unit_price"),
            (("X", Decimal("1"), -1), "stock"),
            (("X", Decimal("1"), True), "stock"),
        )
        for args, field in cases:
            with self.subTest(args=args):
                with self.assertRaises(ValidationError) as ctx:
                    self.service.create_product(*args)
                self.assertEqual(ctx.exception.field, field)
        self.assertEqual(self.service.list_products(), [])


class JsonStoreTests(unittest.TestCase):
    """Valida lectura y escritura del documento JSON."""

    def test_malformed_file_raises_service_error(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            path = Path(temp_dir) / "inventario.json"
            path.write_text("{no es json", encoding="utf-8")

            with self.assertRaises(ServiceError):
                JsonStore(path).read()

    def test_section_must_be_a_list(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            path = Path(temp_dir) / "inventario.json"
            path.write_text('{"products": {}}', encoding="utf-8")

            with self.assertRaises(ServiceError):
                JsonStore(path).read()

    def test_write_replaces_file_and_leaves_no_temp(self) -> None:
        """La escritura usa archivo temporal y no deja residuos."""
        with tempfile.TemporaryDirectory() as temp_dir:
            path = Path(temp_dir) / "nested" / "inventario.json"
            store = JsonStore(path)

            store.write({"products": [], "sales": [{"id": "s1", "created_at": "x", "lines": []}]})

            self.assertEqual(store.read()["sales"][0]["id"], "s1")
            self.assertFalse(path.with_name("inventario.json.tmp").exists())


if __name__ == "__main__":
    unittest.main()
