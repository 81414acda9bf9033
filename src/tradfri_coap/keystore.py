"""
Pre-shared key storage: a ``KEY=value`` file read and written with python-dotenv.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from dotenv import dotenv_values, set_key, unset_key

logger = logging.getLogger(__name__)

DEFAULT_KEY_FILE = ".env"
PRESHARED_KEY = "PRESHARED_KEY"


class KeyStore:
    def __init__(self, path: Union[str, Path] = DEFAULT_KEY_FILE):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Optional[str]:
        if not self._path.is_file():
            return None
        return dotenv_values(self._path).get(PRESHARED_KEY) or None

    def save(self, key: str) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.touch(exist_ok=True)
        set_key(self._path, PRESHARED_KEY, key, quote_mode="never")
        logger.info("Preshared key saved to %s", self._path)

    def clear(self) -> None:
        if self._path.is_file() and self.load() is not None:
            unset_key(self._path, PRESHARED_KEY)
