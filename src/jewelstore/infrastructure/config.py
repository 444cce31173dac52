"""Runtime settings read from the environment.

Only the composition root and the entry points call ``load_settings``;
the domain and application layers never look at the environment.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"

_LEVELS_BY_ENV = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    env: str = "development"
    log_level: str = "DEBUG"
    host: str = "0.0.0.0"
    port: int = 5001

    @property
    def products_file(self) -> Path:
        return self.data_dir / "products.json"

    @property
    def orders_file(self) -> Path:
        return self.data_dir / "orders.json"


def load_settings() -> Settings:
    env = os.getenv("JEWELSTORE_ENV", "development").lower()
    return Settings(
        data_dir=Path(os.getenv("JEWELSTORE_DATA_DIR", str(_DEFAULT_DATA_DIR))),
        env=env,
        log_level=os.getenv("JEWELSTORE_LOG_LEVEL", _LEVELS_BY_ENV.get(env, "INFO")).upper(),
        host=os.getenv("JEWELSTORE_HOST", "0.0.0.0"),
        port=int(os.getenv("JEWELSTORE_PORT", "5001")),
    )
