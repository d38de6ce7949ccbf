from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field

from services.sorting import SortKey

DEFAULT_RESTAURANTS_PATH = Path(__file__).resolve().parent.parent / "data" / "restaurants.json"


class Configuration(BaseModel):
    # Data
    restaurants_path: str = Field(default=str(DEFAULT_RESTAURANTS_PATH))

    # List defaults
    default_sort: str = Field(default=SortKey.BEST_MATCH.value)

    # Logging
    log_level: str = Field(default="INFO")

    @classmethod
    def from_env(cls, overrides: Optional[dict[str, Any]] = None) -> "Configuration":
        raw: dict[str, Any] = {}

        env_map = {
            "restaurants_path": os.getenv("RESTAURANTS_PATH"),
            "default_sort": os.getenv("DEFAULT_SORT"),
            "log_level": os.getenv("LOG_LEVEL"),
        }

        for k, v in env_map.items():
            if v is None:
                continue
            raw[k] = v

        if overrides:
            raw.update({k: v for k, v in overrides.items() if v is not None})

        return cls(**raw)

    def resolve_default_sort(self) -> SortKey:
        sort_key = SortKey.from_identifier(self.default_sort)
        if sort_key is None:
            raise ValueError(f"DEFAULT_SORT must be one of {[k.value for k in SortKey]}")
        return sort_key

    def log_summary(self) -> str:
        return "restaurants_path=%s exists=%s default_sort=%s log_level=%s" % (
            self.restaurants_path,
            Path(self.restaurants_path).is_file(),
            self.default_sort,
            self.log_level,
        )
