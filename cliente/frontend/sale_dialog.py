"""Dialogo de nueva venta."""

from __future__ import annotations

from typing import TYPE_CHECKING

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QAbstractItemView,
    QComboBox,
    QDialog,
    QHeaderView,
    QLabel,
    QLineEdit,
    QPushButton,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from cliente.frontend.dialogs import show_error, show_info
from parametros import DEFAULT_SALE_QUANTITY
from servidor.services.inventory_utils import format_clp
from shared.errors import ServiceError, ValidationError

if TYPE_CHECKING:
    from cliente.backend.controller import AppController
    from cliente.backend.sale_draft import SaleDraft


class SaleDialog(QDialog):
    """Arma un borrador de venta y lo confirma en una sola operacion."""

    _HEADERS = ("Producto", "Precio unitario", "Cantidad", "Total", "Acciones")

    def __init__(
        self,
        controller: AppController,
        draft: SaleDraft,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._controller = controller
        self._draft = draft
        self._product_input: QComboBox
        self._quantity_input: QLineEdit
        self._table: QTableWidget
        self._total_label: QLabel
        self._finalize_button: QPushButton
        self._error_labels: dict[str, QLabel] = {}

        self.setWindowTitle("Nueva venta")
        self.setModal(True)
        self.setMinimumSize(700, 560)

        self._build_ui()
        self._apply_styles()
        self._render_lines()

    def _build_ui(self) -> None:
        """Construye formulario, tabla de lineas y pie con total."""
        root_layout = QVBoxLayout(self)
        root_layout.setContentsMargins(24, 24, 24, 24)
        root_layout.setSpacing(8)

        title_label = QLabel("Nueva venta", self)
        title_label.setObjectName("titleLabel")
        subtitle_label = QLabel("Ingresa la informacion de la venta", self)
        subtitle_label.setObjectName("subtitleLabel")

        product_label = QLabel("Producto", self)
        product_label.setObjectName("fieldLabel")
        self._product_input = QComboBox(self)
        self._product_input.addItem("Selecciona un producto", "")
        for product in self._draft.catalog:
            self._product_input.addItem(product.name, product.id)

        quantity_label = QLabel("Cantidad", self)
        quantity_label.setObjectName("fieldLabel")
        self._quantity_input = QLineEdit(str(DEFAULT_SALE_QUANTITY), self)
        self._quantity_input.setPlaceholderText("Ingresa la cantidad")

        add_button = QPushButton("Agregar producto a la venta", self)
        add_button.setObjectName("secondaryButton")
        add_button.clicked.connect(self._on_add_clicked)

        self._table = QTableWidget(0, len(self._HEADERS), self)
        self._table.setHorizontalHeaderLabels(self._HEADERS)
        self._table.verticalHeader().setVisible(False)
        self._table.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        self._table.horizontalHeader().setSectionResizeMode(QHeaderView.ResizeMode.Stretch)

        self._total_label = QLabel(self)
        self._total_label.setObjectName("totalLabel")
        self._total_label.setAlignment(Qt.AlignmentFlag.AlignRight)

        self._finalize_button = QPushButton("Finalizar venta", self)
        self._finalize_button.clicked.connect(self._on_finalize_clicked)

        root_layout.addWidget(title_label)
        root_layout.addWidget(subtitle_label)
        root_layout.addSpacing(8)
        root_layout.addWidget(product_label)
        root_layout.addWidget(self._product_input)
        root_layout.addWidget(self._build_error_label("product_id"))
        root_layout.addWidget(quantity_label)
        root_layout.addWidget(self._quantity_input)
        root_layout.addWidget(self._build_error_label("quantity"))
        root_layout.addWidget(add_button)
        root_layout.addSpacing(8)
        root_layout.addWidget(self._table)
        root_layout.addWidget(self._total_label)
        root_layout.addWidget(self._finalize_button)

    def _build_error_label(self, field: str) -> QLabel:
        error_label = QLabel("", self)
        error_label.setObjectName("errorLabel")
        error_label.setVisible(False)
        self._error_labels[field] = error_label
        return error_label

    def _apply_styles(self) -> None:
        """Aplica estilos alineados al look general de la app."""
        self.setStyleSheet(
            """
            QDialog {
                background-color: #ffffff;
            }
            QLabel#titleLabel {
                color: #111827;
                font-family: "Segoe UI";
                font-size: 20px;
                font-weight: 600;
            }
            QLabel#subtitleLabel, QLabel#fieldLabel {
                color: #475569;
                font-family: "Segoe UI";
                font-size: 13px;
            }
            QLabel#errorLabel {
                color: #C80202;
                font-family: "Segoe UI";
                font-size: 12px;
            }
            QLabel#totalLabel {
                color: #111827;
                font-family: "Segoe UI";
                font-size: 15px;
                font-weight: 600;
            }
            QLineEdit, QComboBox {
                background-color: #f8fafc;
                border: 1px solid #d1d5db;
                border-radius: 8px;
                font-family: "Segoe UI";
                font-size: 13px;
                padding: 8px;
            }
            QPushButton {
                background-color: #C80202;
                border: none;
                border-radius: 10px;
                color: #ffffff;
                font-family: "Segoe UI";
                font-size: 13px;
                font-weight: 600;
                min-height: 40px;
                padding: 8px 12px;
            }
            QPushButton:hover {
                background-color: #A30202;
            }
            QPushButton:disabled {
                background-color: #d5a3a3;
                color: #f5e8e8;
            }
            QPushButton#secondaryButton, QPushButton#rowButton {
                background-color: #e5e7eb;
                color: #1f2937;
            }
            QPushButton#secondaryButton:hover, QPushButton#rowButton:hover {
                background-color: #d1d5db;
            }
            """
        )

    def _render_lines(self) -> None:
        """Redibuja la tabla, el total y el estado del boton finalizar."""
        lines = self._draft.line_items
        self._table.setRowCount(len(lines))
        for row_index, line in enumerate(lines):
            self._table.setItem(row_index, 0, QTableWidgetItem(line.name))
            self._table.setItem(row_index, 1, QTableWidgetItem(format_clp(line.unit_price)))
            self._table.setItem(row_index, 2, QTableWidgetItem(str(line.quantity)))
            self._table.setItem(row_index, 3, QTableWidgetItem(format_clp(line.subtotal)))

            remove_button = QPushButton("Quitar", self._table)
            remove_button.setObjectName("rowButton")
            remove_button.clicked.connect(
                lambda _checked=False, product_id=line.product_id: self._on_remove_clicked(
                    product_id
                )
            )
            self._table.setCellWidget(row_index, 4, remove_button)

        self._total_label.setText(f"Total: {format_clp(self._draft.total)}")
        self._finalize_button.setEnabled(self._draft.can_commit)

    def _clear_errors(self) -> None:
        for error_label in self._error_labels.values():
            error_label.clear()
            error_label.setVisible(False)

    def _on_add_clicked(self, _checked: bool = False) -> None:
        """Agrega la seleccion actual al borrador."""
        self._clear_errors()
        try:
            self._controller.on_add_sale_line(
                self._draft,
                product_id=self._product_input.currentData(),
                raw_quantity=self._quantity_input.text(),
            )
        except ValidationError as exc:
            error_label = self._error_labels.get(exc.field or "quantity")
            if error_label is None:
                show_error(self, "Error de venta", str(exc))
                return
            error_label.setText(str(exc))
            error_label.setVisible(True)
            return

        self._product_input.setCurrentIndex(0)
        self._quantity_input.setText(str(DEFAULT_SALE_QUANTITY))
        self._render_lines()

    def _on_remove_clicked(self, product_id: str) -> None:
        self._controller.on_remove_sale_line(self._draft, product_id)
        self._render_lines()

    def _on_finalize_clicked(self, _checked: bool = False) -> None:
        """Confirma la venta; si falla conserva el borrador para reintentar."""
        self._finalize_button.setEnabled(False)
        try:
            self._controller.on_finalize_sale(self._draft)
        except (ValidationError, ServiceError) as exc:
            show_error(self, "Error de venta", str(exc))
            self._render_lines()
            return

        show_info(self, "Venta registrada", "Venta realizada con exito.")
        self.accept()
