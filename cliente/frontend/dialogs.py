"""Helpers de dialogos para frontend."""

from __future__ import annotations

from PyQt6.QtWidgets import QMessageBox, QWidget


def show_info(parent: QWidget | None, title: str, message: str) -> None:
    """Muestra un dialogo informativo."""
    QMessageBox.information(parent, title, message)


def show_error(parent: QWidget | None, title: str, message: str) -> None:
    """Muestra un dialogo de error."""
    QMessageBox.critical(parent, title, message)


def ask_confirmation(parent: QWidget | None, title: str, message: str) -> bool:
    """Pide confirmacion al usuario; retorna True si acepta."""
    answer = QMessageBox.question(
        parent,
        title,
        message,
        QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.Cancel,
        QMessageBox.StandardButton.Cancel,
    )
    return answer == QMessageBox.StandardButton.Yes
