"""Tests para utilidades de inventario."""

from __future__ import annotations

import unittest
from decimal import Decimal

from servidor.domain.models import Sale, SaleLine
from servidor.services.inventory_utils import (
    format_clp,
    product_from_dict,
    product_to_dict,
    sale_from_dict,
    sale_to_dict,
    to_money,
    to_sale_record,
)
from shared.errors import ServiceError


class InventoryUtilsTests(unittest.TestCase):
    """Valida funciones utilitarias de inventario."""

    def test_format_clp(self) -> None:
        """Debe formatear CLP sin decimales."""
        self.assertEqual(format_clp(4990), "$4,990")
        self.assertEqual(format_clp(Decimal("1500.40")), "$1,500")

    def test_to_money(self) -> None:
        """Debe normalizar a dos decimales y rechazar valores no numericos."""
        self.assertEqual(to_money("10"), Decimal("10.00"))
        self.assertEqual(to_money(2.5), Decimal("2.50"))
        with self.assertRaises(ServiceError):
            to_money("diez")
        with self.assertRaises(ServiceError):
            to_money("NaN")

    def test_product_dict_conversion(self) -> None:
        """Debe leer lo que escribe y rechazar registros incompletos."""
        product = product_from_dict(
            {"id": "p1", "name": " Widget ", "unit_price": "10.5", "stock": "3"}
        )

        self.assertEqual(product.name, "Widget")
        self.assertEqual(product.stock, 3)
        self.assertEqual(
            product_to_dict(product),
            {"id": "p1", "name": "Widget", "unit_price": "10.50", "stock": 3},
        )
        with self.assertRaises(ServiceError):
            product_from_dict({"id": "p1", "name": "Widget"})
        with self.assertRaises(ServiceError):
            product_from_dict(["p1"])

    def test_sale_record_total(self) -> None:
        """El registro de venta expone lineas inmutables y el total."""
        sale = Sale(
            id="s1",
            created_at="2026-01-01T00:00:00+00:00",
            lines=[
                SaleLine(product_id="p1", name="Widget", unit_price=Decimal("10.00"), quantity=3),
                SaleLine(product_id="p2", name="Gadget", unit_price=Decimal("2.50"), quantity=2),
            ],
        )

        record = to_sale_record(sale)
        restored = sale_from_dict(sale_to_dict(sale))

        self.assertEqual(record.total, Decimal("35.00"))
        self.assertEqual(len(record.lines), 2)
        self.assertEqual(restored.total, Decimal("35.00"))
        with self.assertRaises(ServiceError):
            sale_from_dict({"id": "s1", "created_at": "x", "lines": {}})


if __name__ == "__main__":
    unittest.main()
