"""Editor configuration loaded from YAML files."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml

EDIT_ENVIRONMENT = "edit"


@dataclass(frozen=True)
class EditorConfig:
    """Settings shared by the compiler, history and CLI.

    YAML format:
    ```yaml
    environment: edit
    overlay_positions: [relative, fixed, absolute]
    history_limit: 100
    log_level: INFO
    components:
      Banner: mysite.components.banner:Banner
    ```

    Attributes:
        environment: Environment flag threaded through every compile call
        overlay_positions: ``style.position`` values that get a resize overlay
        history_limit: Maximum number of snapshots kept, 0 for unlimited
        log_level: Level name passed to ``logging.basicConfig``
        components: Extra component names mapped to ``"module:attribute"`` paths
    """

    environment: str = EDIT_ENVIRONMENT
    overlay_positions: tuple[str, ...] = ("relative", "fixed", "absolute")
    history_limit: int = 100
    log_level: str = "INFO"
    components: dict[str, str] = field(default_factory=dict)

    @property
    def is_edit(self) -> bool:
        return self.environment == EDIT_ENVIRONMENT

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> EditorConfig:
        """Build a config from parsed YAML data.

        Raises:
            ValueError: If the data contains unknown keys or bad values
        """
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(sorted(unknown))}")

        values = dict(data)
        if "overlay_positions" in values:
            values["overlay_positions"] = tuple(values["overlay_positions"])
        if "components" in values:
            values["components"] = dict(values["components"] or {})
        limit = values.get("history_limit", 0)
        if not isinstance(limit, int) or limit < 0:
            raise ValueError(f"history_limit must be a non-negative integer, got {limit!r}")
        return cls(**values)


def load_config(path: str | Path | None = None) -> EditorConfig:
    """Load an editor config from a YAML file.

    Args:
        path: Path to the YAML file. ``None`` returns the defaults.

    Returns:
        EditorConfig instance
    """
    if path is None:
        return EditorConfig()

    with open(Path(path)) as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping")
    return EditorConfig.from_dict(data)
