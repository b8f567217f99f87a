#!/usr/bin/env python3
"""YAML file backed key-value store.

The rows live in memory and are written to a YAML mapping after every
change, or once per batch. Files are replaced atomically, so a reader
never sees a half-written store.

Example file:
    /: null
    /css: /srv/project/res/css
    /css/style.css: /srv/project/res/css/style.css
"""

import os
import tempfile
from pathlib import Path
from typing import Optional, Union

import yaml

from pathmap.core.constants import ErrorCode
from pathmap.infrastructure.logger import Logger
from pathmap.store.base import StoreError
from pathmap.store.memory import MemoryStore


class YamlFileStore(MemoryStore):
    """Store persisted to a YAML file."""

    def __init__(self, path: Union[str, Path], logger: Optional[Logger] = None):
        """Initialize the store and load existing rows.

        Args:
            path: YAML file holding the rows (created on first write)
            logger: Logger to use

        Raises:
            StoreError: If the file exists but cannot be parsed
        """
        super().__init__(logger=logger)
        self.path = Path(path).expanduser()
        self._load()

    def _load(self) -> None:
        """Read the rows from the YAML file, if it exists."""
        if not self.path.exists():
            self.logger.debug("Store file does not exist yet", file=str(self.path))
            return

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise StoreError(f"YAML parse error in {self.path}: {e}", ErrorCode.INVALID_INPUT)
        except OSError as e:
            raise StoreError(f"Error reading store {self.path}: {e}", ErrorCode.INTERNAL_ERROR)

        if data is None:
            data = {}

        if not isinstance(data, dict):
            raise StoreError(f"Invalid store format in {self.path}", ErrorCode.INVALID_INPUT)

        for key, value in data.items():
            self._check_row(key, value)
            self._data[key] = value

        self.logger.debug("Loaded store", file=str(self.path), rows=len(self._data))

    def _commit(self) -> None:
        """Write all rows to the YAML file."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
        except OSError as e:
            raise StoreError(f"Error writing store {self.path}: {e}", ErrorCode.INTERNAL_ERROR)

        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                yaml.safe_dump(
                    self._data,
                    f,
                    default_flow_style=False,
                    sort_keys=False,
                    allow_unicode=True,
                )
            os.replace(tmp_path, self.path)
        except (OSError, yaml.YAMLError) as e:
            try:
                os.unlink(tmp_path)
            except FileNotFoundError:
                pass
            raise StoreError(f"Error writing store {self.path}: {e}", ErrorCode.INTERNAL_ERROR)

        self.logger.debug("Flushed store", file=str(self.path), rows=len(self._data))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(path='{self.path}', rows={len(self._data)})"
