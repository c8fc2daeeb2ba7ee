"""Validaciones para entradas del cliente.

Las funciones son puras y no dependen de la UI: retornan el valor validado o
un ``FieldError`` que la capa de presentacion asocia al campo indicado.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation


@dataclass(frozen=True, slots=True)
class FieldError:
    """Error de validacion asociado a un campo de formulario."""

    field: str
    message: str


@dataclass(frozen=True, slots=True)
class SaleLineInput:
    """Seleccion de producto y cantidad ya validadas."""

    product_id: str
    quantity: int


@dataclass(frozen=True, slots=True)
class ProductInput:
    """Datos de producto ya validados."""

    name: str
    unit_price: Decimal
    stock: int


def validate_sale_line_input(
    product_id: str | None,
    raw_quantity: object,
) -> SaleLineInput | FieldError:
    """Valida producto seleccionado y cantidad antes de agregar al borrador."""
    product_id_clean = (product_id or "").strip()
    if not product_id_clean:
        return FieldError("product_id", "El producto es obligatorio.")

    quantity = parse_int(raw_quantity)
    if quantity is None:
        return FieldError("quantity", "La cantidad debe ser un numero entero.")
    if quantity <= 0:
        return FieldError("quantity", "La cantidad debe ser mayor a 0.")

    return SaleLineInput(product_id=product_id_clean, quantity=quantity)


def validate_product_input(
    name: str | None,
    raw_price: object,
    raw_stock: object,
) -> ProductInput | FieldError:
    """Valida el formulario de producto; retorna el primer campo invalido."""
    name_clean = (name or "").strip()
    if not name_clean:
        return FieldError("name", "El nombre es obligatorio.")

    price = parse_price(raw_price)
    if price is None:
        return FieldError("unit_price", "Ingresa un precio valido (maximo 2 decimales).")
    if price < 0:
        return FieldError("unit_price", "El precio no puede ser negativo.")

    stock = parse_int(raw_stock)
    if stock is None:
        return FieldError("stock", "El stock debe ser un numero entero.")
    if stock < 0:
        return FieldError("stock", "El stock no puede ser negativo.")

    return ProductInput(name=name_clean, unit_price=price, stock=stock)


def parse_int(value: object) -> int | None:
    """Convierte texto o numero a entero; None si no es entero exacto."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return int(text)
        except ValueError:
            return None
    return None


def parse_price(value: object) -> Decimal | None:
    """Convierte texto a Decimal aceptando coma decimal; None si es invalido."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, Decimal):
        amount = value
    else:
        text = str(value).strip().replace(",", ".")
        if not text:
            return None
        try:
            amount = Decimal(text)
        except InvalidOperation:
            return None

    if not amount.is_finite():
        return None
    if amount.as_tuple().exponent < -2:
        return None
    return amount
