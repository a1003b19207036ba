from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .core.config import env, env_flag
from .registry.base import CountryRegistry
from .registry.json_registry import JsonRegistry
from .registry.storage import IbanStorage


@dataclass(frozen=True)
class AppConfig:
    log_level: str
    log_json: bool
    registry_path: Optional[Path]
    registry_extend: bool

    def build_registry(self) -> CountryRegistry:
        if self.registry_path is None:
            return IbanStorage()
        return JsonRegistry(self.registry_path, extend=self.registry_extend)


def load_config() -> AppConfig:
    path = env("IBAN_REGISTRY_PATH")
    return AppConfig(
        log_level=env("LOG_LEVEL", "INFO").upper(),
        log_json=env_flag("IBAN_LOG_JSON"),
        registry_path=Path(path) if path else None,
        registry_extend=env_flag("IBAN_REGISTRY_EXTEND"),
    )
