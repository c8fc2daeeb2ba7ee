"""Pagina de gestion de productos."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QColor
from PyQt6.QtWidgets import (
    QAbstractItemView,
    QFrame,
    QGraphicsDropShadowEffect,
    QHBoxLayout,
    QHeaderView,
    QLabel,
    QPushButton,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from cliente.frontend.dialogs import ask_confirmation, show_error, show_info
from cliente.frontend.product_dialog import ProductDialog
from servidor.services.inventory_utils import format_clp
from shared.errors import ServiceError, ValidationError
from shared.status import ProductStatus, status_label

if TYPE_CHECKING:
    from cliente.backend.controller import AppController
    from shared.protocol import CatalogProduct


class ProductsPage(QWidget):
    """Pagina embebible con la tabla de productos y sus acciones."""

    _HEADERS = ("Producto", "Valor unitario", "Stock", "Estado", "Acciones")
    _STATUS_COLORS = {
        ProductStatus.IN_STOCK: "#15803d",
        ProductStatus.OUT_OF_STOCK: "#C80202",
    }

    def __init__(
        self,
        controller: AppController,
        on_back: Callable[[], None],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._controller = controller
        self._on_back = on_back
        self._table: QTableWidget
        self.setObjectName("productsPage")

        self._build_ui()
        self._apply_styles()

    def _build_ui(self) -> None:
        """Construye la interfaz de la pagina."""
        root_layout = QVBoxLayout(self)
        root_layout.setContentsMargins(24, 24, 24, 24)

        card = QFrame(self)
        card.setObjectName("pageCard")
        card_layout = QVBoxLayout(card)
        card_layout.setContentsMargins(24, 24, 24, 24)
        card_layout.setSpacing(16)

        header_layout = QHBoxLayout()
        titles_layout = QVBoxLayout()
        section_label = QLabel("Gestion de productos", card)
        section_label.setObjectName("sectionLabel")
        title_label = QLabel("Productos", card)
        title_label.setObjectName("pageTitle")
        titles_layout.addWidget(section_label)
        titles_layout.addWidget(title_label)

        new_button = QPushButton("Nuevo producto", card)
        new_button.setCursor(Qt.CursorShape.PointingHandCursor)
        new_button.clicked.connect(self._on_new_clicked)
        back_button = QPushButton("Regresar", card)
        back_button.setObjectName("backButton")
        back_button.clicked.connect(self._on_back)

        header_layout.addLayout(titles_layout)
        header_layout.addStretch(1)
        header_layout.addWidget(back_button)
        header_layout.addWidget(new_button)

        self._table = QTableWidget(0, len(self._HEADERS), card)
        self._table.setHorizontalHeaderLabels(self._HEADERS)
        self._table.verticalHeader().setVisible(False)
        self._table.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        self._table.setSelectionMode(QAbstractItemView.SelectionMode.NoSelection)
        self._table.horizontalHeader().setSectionResizeMode(
            QHeaderView.ResizeMode.Stretch
        )

        card_layout.addLayout(header_layout)
        card_layout.addWidget(self._table)

        shadow = QGraphicsDropShadowEffect(card)
        shadow.setBlurRadius(38)
        shadow.setOffset(0, 8)
        shadow.setColor(QColor(0, 0, 0, 38))
        card.setGraphicsEffect(shadow)

        root_layout.addWidget(card)

    def _apply_styles(self) -> None:
        """Aplica estilos QSS de la pagina."""
        self.setStyleSheet(
            """
            QFrame#pageCard {
                background-color: #ffffff;
                border-radius: 18px;
            }
            QLabel#sectionLabel {
                color: #64748b;
                font-family: "Segoe UI";
                font-size: 11px;
                font-weight: 600;
            }
            QLabel#pageTitle {
                color: #111827;
                font-family: "Segoe UI";
                font-size: 20px;
                font-weight: 600;
            }
            QTableWidget {
                border: 1px solid #e5e7eb;
                border-radius: 8px;
                font-family: "Segoe UI";
                font-size: 13px;
            }
            QPushButton {
                background-color: #C80202;
                border: none;
                border-radius: 10px;
                color: #ffffff;
                font-family: "Segoe UI";
                font-size: 13px;
                font-weight: 600;
                min-height: 36px;
                padding: 6px 14px;
            }
            QPushButton:hover {
                background-color: #A30202;
            }
            QPushButton#backButton, QPushButton#rowButton {
                background-color: #e5e7eb;
                color: #1f2937;
            }
            QPushButton#backButton:hover, QPushButton#rowButton:hover {
                background-color: #d1d5db;
            }
            """
        )

    def refresh(self) -> None:
        """Recarga la tabla desde el catalogo."""
        try:
            rows = self._controller.list_products()
        except ServiceError as exc:
            show_error(self, "Error de productos", str(exc))
            return

        self._table.setRowCount(len(rows))
        for row_index, (product, status) in enumerate(rows):
            self._table.setItem(row_index, 0, QTableWidgetItem(product.name))
            self._table.setItem(row_index, 1, QTableWidgetItem(format_clp(product.unit_price)))
            self._table.setItem(row_index, 2, QTableWidgetItem(str(product.stock)))

            status_item = QTableWidgetItem(f"● {status_label(status)}")
            status_item.setForeground(QColor(self._STATUS_COLORS[status]))
            self._table.setItem(row_index, 3, status_item)

            self._table.setCellWidget(row_index, 4, self._build_row_actions(product))

    def _build_row_actions(self, product: CatalogProduct) -> QWidget:
        """Construye botones editar/eliminar para una fila."""
        container = QWidget(self._table)
        layout = QHBoxLayout(container)
        layout.setContentsMargins(4, 2, 4, 2)
        layout.setSpacing(6)

        edit_button = QPushButton("Editar", container)
        edit_button.setObjectName("rowButton")
        edit_button.clicked.connect(lambda _checked=False, p=product: self._on_edit_clicked(p))
        delete_button = QPushButton("Eliminar", container)
        delete_button.setObjectName("rowButton")
        delete_button.clicked.connect(
            lambda _checked=False, p=product: self._on_delete_clicked(p)
        )

        layout.addWidget(edit_button)
        layout.addWidget(delete_button)
        return container

    def _on_new_clicked(self, _checked: bool = False) -> None:
        dialog = ProductDialog(controller=self._controller, parent=self)
        if dialog.exec():
            self.refresh()

    def _on_edit_clicked(self, product: CatalogProduct) -> None:
        dialog = ProductDialog(controller=self._controller, product=product, parent=self)
        if dialog.exec():
            self.refresh()

    def _on_delete_clicked(self, product: CatalogProduct) -> None:
        """Pide confirmacion y elimina el producto."""
        confirmed = ask_confirmation(
            self,
            "¿Estas seguro?",
            f"Estas a punto de eliminar \"{product.name}\". "
            "Esta accion no se puede deshacer. ¿Deseas continuar?",
        )
        if not confirmed:
            return

        try:
            self._controller.on_delete_product(product.id)
        except (ValidationError, ServiceError) as exc:
            show_error(self, "Error al eliminar", str(exc))
            return

        show_info(self, "Producto eliminado", "Producto eliminado con exito.")
        self.refresh()
