"""Dialogo para crear o editar productos."""

from __future__ import annotations

from typing import TYPE_CHECKING

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QColor
from PyQt6.QtWidgets import (
    QDialog,
    QFrame,
    QGraphicsDropShadowEffect,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from cliente.frontend.dialogs import show_error, show_info
from shared.errors import ServiceError, ValidationError

if TYPE_CHECKING:
    from cliente.backend.controller import AppController
    from shared.protocol import CatalogProduct


class ProductDialog(QDialog):
    """Dialogo modal para crear un producto o editar uno existente."""

    def __init__(
        self,
        controller: AppController,
        product: CatalogProduct | None = None,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._controller = controller
        self._product = product
        self._name_input: QLineEdit
        self._price_input: QLineEdit
        self._stock_input: QLineEdit
        self._error_labels: dict[str, QLabel] = {}

        title = "Editar producto" if product is not None else "Nuevo producto"
        self.setWindowTitle(title)
        self.setModal(True)
        self.setMinimumSize(460, 360)
        self.resize(500, 400)

        self._build_ui(title)
        self._apply_styles()

    def _build_ui(self, title: str) -> None:
        """Construye widgets del dialogo."""
        root_layout = QVBoxLayout(self)
        root_layout.setContentsMargins(18, 18, 18, 18)

        card = QFrame(self)
        card.setObjectName("dialogCard")
        card_layout = QVBoxLayout(card)
        card_layout.setContentsMargins(24, 24, 24, 24)
        card_layout.setSpacing(8)

        title_label = QLabel(title, card)
        title_label.setObjectName("titleLabel")
        title_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        card_layout.addWidget(title_label)
        card_layout.addSpacing(4)

        self._name_input = self._add_field(card, card_layout, "name", "Nombre", "Monitor 24")
        self._price_input = self._add_field(card, card_layout, "unit_price", "Precio unitario", "4990")
        self._stock_input = self._add_field(card, card_layout, "stock", "Stock", "0")

        if self._product is not None:
            self._name_input.setText(self._product.name)
            self._price_input.setText(str(self._product.unit_price))
            self._stock_input.setText(str(self._product.stock))

        buttons_layout = QHBoxLayout()
        buttons_layout.addStretch(1)

        cancel_button = QPushButton("Cancelar", card)
        cancel_button.setObjectName("cancelButton")
        save_button = QPushButton("Guardar", card)

        cancel_button.clicked.connect(self.reject)
        save_button.clicked.connect(self._on_save_clicked)

        buttons_layout.addWidget(cancel_button)
        buttons_layout.addWidget(save_button)

        card_layout.addSpacing(4)
        card_layout.addLayout(buttons_layout)

        shadow = QGraphicsDropShadowEffect(card)
        shadow.setBlurRadius(30)
        shadow.setOffset(0, 6)
        shadow.setColor(QColor(0, 0, 0, 35))
        card.setGraphicsEffect(shadow)

        root_layout.addWidget(card)
        self._name_input.setFocus()

    def _add_field(
        self,
        card: QFrame,
        layout: QVBoxLayout,
        field: str,
        label_text: str,
        placeholder: str,
    ) -> QLineEdit:
        """Agrega label, input y mensaje de error para un campo."""
        label = QLabel(label_text, card)
        label.setObjectName("fieldLabel")

        line_edit = QLineEdit(card)
        line_edit.setPlaceholderText(placeholder)

        error_label = QLabel("", card)
        error_label.setObjectName("errorLabel")
        error_label.setVisible(False)
        self._error_labels[field] = error_label

        layout.addWidget(label)
        layout.addWidget(line_edit)
        layout.addWidget(error_label)
        return line_edit

    def _apply_styles(self) -> None:
        """Aplica estilos visuales consistentes con la app."""
        self.setStyleSheet(
            """
            QDialog {
                background-color: #eef1f4;
            }
            QFrame#dialogCard {
                background-color: #ffffff;
                border-radius: 16px;
            }
            QLabel#titleLabel {
                color: #20232a;
                font-family: "Segoe UI";
                font-size: 22px;
                font-weight: 700;
            }
            QLabel#fieldLabel {
                color: #334155;
                font-family: "Segoe UI";
                font-size: 13px;
                font-weight: 600;
            }
            QLabel#errorLabel {
                color: #C80202;
                font-family: "Segoe UI";
                font-size: 12px;
            }
            QLineEdit {
                background-color: #f8fafc;
                border: 1px solid #d1d5db;
                border-radius: 8px;
                color: #111827;
                font-family: "Segoe UI";
                font-size: 13px;
                padding: 10px;
            }
            QLineEdit:focus {
                border: 1px solid #2563eb;
                background-color: #ffffff;
            }
            QPushButton {
                background-color: #2563eb;
                border: none;
                border-radius: 10px;
                color: #ffffff;
                font-family: "Segoe UI";
                font-size: 13px;
                font-weight: 600;
                min-height: 40px;
                min-width: 100px;
                padding: 8px 12px;
            }
            QPushButton:hover {
                background-color: #1d4ed8;
            }
            QPushButton#cancelButton {
                background-color: #e5e7eb;
                color: #1f2937;
            }
            QPushButton#cancelButton:hover {
                background-color: #d1d5db;
            }
            """
        )

    def _clear_errors(self) -> None:
        for error_label in self._error_labels.values():
            error_label.clear()
            error_label.setVisible(False)

    def _show_field_error(self, field: str | None, message: str) -> bool:
        """Muestra el error bajo el campo; False si el campo no existe."""
        error_label = self._error_labels.get(field or "")
        if error_label is None:
            return False
        error_label.setText(message)
        error_label.setVisible(True)
        return True

    def _on_save_clicked(self) -> None:
        """Valida y guarda el producto usando el controller."""
        self._clear_errors()
        product_id = self._product.id if self._product is not None else None
        try:
            product = self._controller.on_save_product(
                product_id=product_id,
                name=self._name_input.text(),
                raw_price=self._price_input.text(),
                raw_stock=self._stock_input.text(),
            )
        except ValidationError as exc:
            if not self._show_field_error(exc.field, str(exc)):
                show_error(self, "Error al guardar producto", str(exc))
            return
        except ServiceError as exc:
            show_error(self, "Error al guardar producto", str(exc))
            return

        show_info(self, "Producto guardado", f"Producto guardado: {product.name}")
        self.accept()
