"""Load engine settings from TOML (e.g. sheetcalc.toml).

Config file is looked up in order:
  1. Path passed to load_config() (if given)
  2. Path in SHEETCALC_CONFIG env var (if set)
  3. sheetcalc.toml in the current working directory

Only the ``[engine]`` table is read. If no file is found, built-in defaults are
used (total keyword "total", modifier floor -0.8).
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

from sheetcalc.logging import get_logger
from sheetcalc.modifiers import DEFAULT_MODIFIER_FLOOR

logger = get_logger(__name__)

CONFIG_ENV_VAR = "SHEETCALC_CONFIG"
CONFIG_FILENAME = "sheetcalc.toml"


class EngineConfig(BaseModel, frozen=True):
    """Settings for one annotation pass.

    Defaults reproduce the stock behaviour; a host only needs a config file to
    localize the total keyword or soften the penalty floor.
    """

    total_keyword: str = Field(
        default="total",
        min_length=1,
        description="Bracket text (trimmed, case-insensitive) that emits the running total.",
    )
    modifier_floor: float = Field(
        default=DEFAULT_MODIFIER_FLOOR,
        le=0.0,
        description="Lowest allowed summed modifier fraction.",
    )
    reveal_on_cursor: bool = Field(
        default=True,
        description="Show raw text for the span containing the selection.",
    )
    log_level: str = Field(
        default="WARNING",
        description="Level name for the sheetcalc logger when set up from the CLI.",
    )

    @field_validator("total_keyword")
    @classmethod
    def keyword_is_bracket_safe(cls, value: str) -> str:
        value = value.strip()
        if not value or "[" in value or "]" in value:
            raise ValueError("total_keyword must be non-blank and contain no brackets")
        return value

    @field_validator("log_level")
    @classmethod
    def level_is_known(cls, value: str) -> str:
        value = value.upper()
        if not isinstance(logging.getLevelName(value), int):
            raise ValueError(f"unknown log level {value!r}")
        return value

    def is_total_marker(self, inner: str) -> bool:
        return inner.strip().casefold() == self.total_keyword.casefold()


def _default_config_paths(path: str | Path | None = None) -> list[Path]:
    """Return paths to check for sheetcalc.toml (first existing wins)."""
    paths: list[Path] = []
    if path is not None:
        paths.append(Path(path))
    if os.environ.get(CONFIG_ENV_VAR):
        paths.append(Path(os.environ[CONFIG_ENV_VAR]))
    paths.append(Path.cwd() / CONFIG_FILENAME)
    return paths


def load_config(path: str | Path | None = None) -> EngineConfig:
    """Load engine config from a TOML file.

    Returns:
        EngineConfig built from the first readable file's ``[engine]`` table,
        or the defaults when there is none. Unknown keys are ignored.

    Raises:
        pydantic.ValidationError: If the file holds invalid values.
    """
    for candidate in _default_config_paths(path):
        if not candidate.is_file():
            continue
        try:
            with open(candidate, "rb") as f:
                data = tomllib.load(f)
        except (OSError, ValueError) as exc:
            logger.warning("Skipping unreadable config %s: %s", candidate, exc)
            continue
        engine: dict[str, Any] = data.get("engine") or {}
        if not isinstance(engine, dict):
            engine = {}
        known = {k: v for k, v in engine.items() if k in EngineConfig.model_fields}
        logger.debug("Loaded config from %s", candidate)
        return EngineConfig(**known)
    return EngineConfig()
