"""Static tool catalog loader."""

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

DEFAULT_CATALOG_PATH = Path(__file__).parent / "tools.yaml"


class ToolConfig(BaseModel):
    """Tool definition loaded from the catalog."""

    name: str
    description: str
    input_schema: dict[str, Any] = Field(
        default_factory=lambda: {"type": "object", "properties": {}}
    )


class ToolCatalog(BaseModel):
    """Container for tool definitions."""

    tools: list[ToolConfig] = Field(default_factory=list)

    def names(self) -> list[str]:
        return [tool.name for tool in self.tools]


def load_tool_catalog(config_path: str | Path | None = None) -> ToolCatalog:
    """Load the tool catalog from YAML.

    Args:
        config_path: Optional custom path for the catalog file.

    Returns:
        Parsed ToolCatalog, or an empty catalog if the file is missing.
    """
    config_path = Path(config_path) if config_path is not None else DEFAULT_CATALOG_PATH

    if not config_path.exists():
        return ToolCatalog()

    with config_path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}

    return ToolCatalog(**data)


@lru_cache()
def get_tool_catalog() -> ToolCatalog:
    return load_tool_catalog()
