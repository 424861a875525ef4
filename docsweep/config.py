# === FILE: docsweep/config.py ===
"""
Loading and validation of the DocSweep configuration.
The schema is described with Pydantic; the bearer token falls back to the
environment when the config file does not carry one.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    SecretStr,
    ValidationError,
    field_validator,
)

TOKEN_ENV_VARS: tuple[str, ...] = ("DA_BEARER_TOKEN", "ADOBE_BEARER_TOKEN")


def token_from_env() -> str:
    """Return the first non-empty bearer token found in the environment."""
    for name in TOKEN_ENV_VARS:
        value = os.environ.get(name, "").strip()
        if value:
            return value
    return ""


def normalize_path(path: str) -> str:
    """Collapse *path* to exactly one leading slash and no trailing slash."""
    stripped = path.strip().strip("/")
    return "/" + stripped if stripped else "/"


class SweepConfig(BaseModel):
    """Configuration for one sweep over the content tree."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    root_path: str = Field(..., min_length=1, description="Folder to start the crawl from.")
    base_url: HttpUrl = Field("https://admin.da.live", description="Root of the admin API.")
    token: SecretStr = Field(default_factory=lambda: SecretStr(token_from_env()), description="Bearer token.")
    concurrency: int = Field(50, ge=1, description="Max concurrent folder expansions.")
    timeout: float = Field(30.0, gt=0, description="Per-request timeout (seconds).")
    user_agent: str = Field("DocSweepBot/1.0", min_length=1, description="User-Agent header.")
    referer: Optional[str] = Field("https://da.live/", description="Referer header, if any.")
    document_extension: str = Field(".html", description="Suffix of documents to inspect.")
    dry_run: bool = Field(False, description="Classify only, never publish.")

    @field_validator("root_path")
    def _normalize_root(cls, v: str) -> str:
        return normalize_path(v)

    @field_validator("base_url", mode="before")
    def _strip_trailing_slash(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.rstrip("/")
        return v

    @field_validator("document_extension")
    def _check_extension(cls, v: str) -> str:
        if not v.startswith(".") or len(v) < 2:
            raise ValueError("document_extension must look like '.html'")
        return v.lower()

    @property
    def api_base(self) -> str:
        """``base_url`` as a string without the trailing slash pydantic adds."""
        return str(self.base_url).rstrip("/")


DEFAULT_CFG = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of YAML must be a mapping, got {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of JSON must be a mapping, got {type(data).__name__}")
    return data


def read_config_file(path: Union[str, Path, None]) -> dict[str, Any]:
    """
    Read a YAML or JSON config file into a plain mapping.
    Raises FileNotFoundError when the file (or the default one) is missing.
    """
    if path is None:
        if not DEFAULT_CFG.exists():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(DEFAULT_CFG))
        path_obj = DEFAULT_CFG
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        return _read_yaml(path_obj)
    if suffix == ".json":
        return _read_json(path_obj)
    raise ValueError(f"Unsupported config format: {suffix}")


def load_config(path: Union[str, Path, None], **overrides: Any) -> SweepConfig:
    """
    Read YAML or JSON and return a validated SweepConfig.
    Keyword overrides whose value is not None replace values from the file.
    """
    data = read_config_file(path)
    data.update({k: v for k, v in overrides.items() if v is not None})
    try:
        return SweepConfig(**data)
    except ValidationError:
        raise
