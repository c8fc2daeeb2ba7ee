"""Pagina de gestion de ventas."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
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

from cliente.frontend.dialogs import show_error
from cliente.frontend.sale_dialog import SaleDialog
from servidor.services.inventory_utils import format_clp
from shared.errors import ServiceError

if TYPE_CHECKING:
    from cliente.backend.controller import AppController
    from shared.protocol import SaleRecord


class SalesPage(QWidget):
    """Pagina embebible con ventas registradas y acceso a nueva venta."""

    _HEADERS = ("Fecha", "Productos", "Cantidad total", "Total")

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
        self.setObjectName("salesPage")

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
        section_label = QLabel("Gestion de ventas", card)
        section_label.setObjectName("sectionLabel")
        title_label = QLabel("Ventas", card)
        title_label.setObjectName("pageTitle")
        titles_layout.addWidget(section_label)
        titles_layout.addWidget(title_label)

        new_sale_button = QPushButton("Nueva venta", card)
        new_sale_button.setCursor(Qt.CursorShape.PointingHandCursor)
        new_sale_button.clicked.connect(self._on_new_sale_clicked)
        back_button = QPushButton("Regresar", card)
        back_button.setObjectName("backButton")
        back_button.clicked.connect(self._on_back)

        header_layout.addLayout(titles_layout)
        header_layout.addStretch(1)
        header_layout.addWidget(back_button)
        header_layout.addWidget(new_sale_button)

        self._table = QTableWidget(0, len(self._HEADERS), card)
        self._table.setHorizontalHeaderLabels(self._HEADERS)
        self._table.verticalHeader().setVisible(False)
        self._table.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        self._table.horizontalHeader().setSectionResizeMode(QHeaderView.ResizeMode.Stretch)

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
            QPushButton#backButton {
                background-color: #e5e7eb;
                color: #1f2937;
            }
            """
        )

    def refresh(self) -> None:
        """Recarga la tabla de ventas."""
        try:
            sales = self._controller.list_sales()
        except ServiceError as exc:
            show_error(self, "Error de ventas", str(exc))
            return

        self._table.setRowCount(len(sales))
        for row_index, sale in enumerate(sales):
            self._table.setItem(row_index, 0, QTableWidgetItem(self._format_date(sale)))
            names = ", ".join(line.name for line in sale.lines)
            self._table.setItem(row_index, 1, QTableWidgetItem(names))
            quantity = sum(line.quantity for line in sale.lines)
            self._table.setItem(row_index, 2, QTableWidgetItem(str(quantity)))
            self._table.setItem(row_index, 3, QTableWidgetItem(format_clp(sale.total)))

    def _on_new_sale_clicked(self, _checked: bool = False) -> None:
        """Abre el dialogo de venta con un borrador nuevo."""
        try:
            draft = self._controller.open_sale_draft()
        except ServiceError as exc:
            show_error(self, "Error de ventas", str(exc))
            return

        dialog = SaleDialog(controller=self._controller, draft=draft, parent=self)
        if dialog.exec():
            self.refresh()

    @staticmethod
    def _format_date(sale: SaleRecord) -> str:
        try:
            created_at = datetime.fromisoformat(sale.created_at)
        except ValueError:
            return sale.created_at
        return created_at.astimezone().strftime("%d/%m/%Y %H:%M")
