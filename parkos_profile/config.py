"""Application configuration.

Values come from explicit arguments first, then ``PARKOS_*`` environment
variables, then defaults.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

from .codecs import JsonValueCodec, PaymentProfileCodec, RecordCodec
from .paths import DEFAULT_IDENTIFIER, PathProvider, app_data_dir, fixed_dir

ENV_DATA_DIR = "PARKOS_DATA_DIR"
ENV_CODEC = "PARKOS_PROFILE_CODEC"
ENV_LOG_LEVEL = "PARKOS_LOG_LEVEL"

CODECS = ("typed", "opaque")


@dataclass
class AppConfig:
    identifier: str = DEFAULT_IDENTIFIER
    data_dir: Optional[Path] = None
    codec: str = "typed"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides: Any) -> "AppConfig":
        env = os.environ if environ is None else environ
        data_dir = env.get(ENV_DATA_DIR) or None

        cfg = cls(
            data_dir=Path(data_dir).expanduser() if data_dir else None,
            codec=(env.get(ENV_CODEC) or "typed").strip().lower(),
            log_level=(env.get(ENV_LOG_LEVEL) or "INFO").strip().upper(),
        )
        for key, value in overrides.items():
            if value is None:
                continue
            if not hasattr(cfg, key):
                raise TypeError(f"Unknown config option: {key}")
            if key == "data_dir":
                value = Path(value).expanduser()
            setattr(cfg, key, value)

        cfg.log_level = str(cfg.log_level).strip().upper()
        if not isinstance(logging.getLevelName(cfg.log_level), int):
            raise ValueError(f"Unknown log level {cfg.log_level!r}")
        return cfg

    def path_provider(self) -> PathProvider:
        if self.data_dir is not None:
            return fixed_dir(self.data_dir)
        identifier = self.identifier

        def _provider() -> Path:
            return app_data_dir(identifier)

        return _provider

    def make_codec(self) -> RecordCodec[Any]:
        if self.codec == "typed":
            return PaymentProfileCodec()
        if self.codec == "opaque":
            return JsonValueCodec()
        raise ValueError(f"Unknown profile codec {self.codec!r}; expected one of {', '.join(CODECS)}")


__all__ = ["AppConfig", "CODECS", "ENV_CODEC", "ENV_DATA_DIR", "ENV_LOG_LEVEL"]
