"""Tests del estado derivado de productos."""

from __future__ import annotations

import unittest

from shared.status import ProductStatus, product_status, status_label


class ProductStatusTests(unittest.TestCase):
    """Valida que el estado dependa solo del stock."""

    def test_positive_stock_is_in_stock(self) -> None:
        self.assertEqual(product_status(1), ProductStatus.IN_STOCK)
        self.assertEqual(product_status(250), ProductStatus.IN_STOCK)

    def test_zero_or_negative_stock_is_out_of_stock(self) -> None:
        """Stock 0 o negativo debe mostrarse agotado."""
        self.assertEqual(product_status(0), ProductStatus.OUT_OF_STOCK)
        self.assertEqual(product_status(-3), ProductStatus.OUT_OF_STOCK)

    def test_labels(self) -> None:
        self.assertEqual(status_label(ProductStatus.IN_STOCK), "En stock")
        self.assertEqual(status_label(ProductStatus.OUT_OF_STOCK), "Agotado")
        self.assertEqual(ProductStatus.OUT_OF_STOCK.value, "OUT_OF_STOCK")


if __name__ == "__main__":
    unittest.main()
