"""Almacenamiento local en un unico archivo JSON."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from parametros import STORE_JSON
from shared.errors import ServiceError

LOGGER = logging.getLogger(__name__)


class JsonStore:
    """Lee y escribe el documento de productos y ventas."""

    SECTIONS = ("products", "sales")

    def __init__(self, path: Path = STORE_JSON) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def read(self) -> dict[str, Any]:
        """Lee el documento; si no existe retorna uno vacio."""
        if not self._path.exists():
            return {section: [] for section in self.SECTIONS}

        try:
            raw_text = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ServiceError(f"No fue posible leer {self._path.name}.") from exc

        try:
            data = json.loads(raw_text)
        except json.JSONDecodeError as exc:
            raise ServiceError(f"{self._path.name} tiene formato invalido.") from exc

        if not isinstance(data, dict):
            raise ServiceError(f"{self._path.name} debe ser un objeto JSON.")

        for section in self.SECTIONS:
            value = data.setdefault(section, [])
            if not isinstance(value, list):
                raise ServiceError(f"{section} debe ser una lista en {self._path.name}.")
        return data

    def write(self, data: dict[str, Any]) -> None:
        """Escribe el documento de manera segura (temp + replace)."""
        temp_path = self._path.with_name(f"{self._path.name}.tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            serialized = json.dumps(data, ensure_ascii=False, indent=2)
            temp_path.write_text(serialized + "\n", encoding="utf-8")
            temp_path.replace(self._path)
        except OSError as exc:
            LOGGER.exception("Error al persistir almacenamiento: %s", self._path)
            raise ServiceError(f"No fue posible persistir {self._path.name}.") from exc
        finally:
            if temp_path.exists():
                temp_path.unlink(missing_ok=True)

        LOGGER.debug("Almacenamiento persistido: %s", self._path)
