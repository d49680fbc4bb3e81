"""Build configuration, read from a YAML file and overridden by CLI options."""

from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError

from openapi_sidebar.errors import SidebarError

DEFAULT_CONFIG_FILE = "openapi-sidebar.yaml"


class SidebarConfig(BaseModel):
    """Presentation settings for one generated API reference."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    spec_path: Path | None = None
    output_dir: Path = Path("docs/api")
    group_paths_by: Literal["tag"] = "tag"
    category_link_source: Literal["tag", "none"] = "tag"
    locale: str = "en"
    base_url: str = "/"
    route_base_path: str = "docs"
    id_prefix: str = "api"
    overview_id: str | None = None


def load_config(path: Path | None) -> SidebarConfig:
    """Load a config file; relative paths in it resolve against its directory."""
    if path is None:
        return SidebarConfig()

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as e:
        raise SidebarError(f"{path}: cannot load config ({e})") from e
    if not isinstance(data, dict):
        raise SidebarError(f"{path}: config must be a mapping")

    for key in ("spec_path", "output_dir"):
        if data.get(key) is not None:
            data[key] = path.parent / data[key]

    try:
        return SidebarConfig(**data)
    except ValidationError as e:
        raise SidebarError(f"{path}: invalid config\n{e}") from e


def merge_overrides(config: SidebarConfig, **overrides) -> SidebarConfig:
    """Apply CLI options that were actually given (None means not set)."""
    changes = {key: value for key, value in overrides.items() if value is not None}
    if not changes:
        return config
    try:
        return SidebarConfig(**{**config.model_dump(), **changes})
    except ValidationError as e:
        raise SidebarError(f"invalid option\n{e}") from e
