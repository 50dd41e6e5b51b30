from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_data_dir
from pydantic import ValidationError as PydanticValidationError

from .models import StoredCredential

logger = logging.getLogger(__name__)


@dataclass
class AuthStore:
    """Single-slot durable store for the bearer credential."""

    app_name: str = "quoteboard"
    filename: str = "credentials.json"
    base_dir: str | Path | None = None

    def _path(self) -> Path:
        base = Path(self.base_dir) if self.base_dir else Path(user_data_dir(self.app_name, "Quoteboard"))
        base.mkdir(parents=True, exist_ok=True)
        return base / self.filename

    def save(self, token: str) -> None:
        path = self._path()
        data = StoredCredential(token=token).model_dump()
        path.write_text(json.dumps(data, indent=2))
        try:
            path.chmod(0o600)
        except OSError:
            pass

    def load(self) -> str | None:
        path = self._path()
        if not path.exists():
            return None
        try:
            data = json.loads(path.read_text())
            stored = StoredCredential.model_validate(data)
        except (json.JSONDecodeError, PydanticValidationError):
            logger.warning("credential_store_corrupt", extra={"path": str(path)})
            self.clear()
            return None
        return stored.token or None

    def clear(self) -> None:
        path = self._path()
        if path.exists():
            path.unlink()
