"""Save and load exported preference snapshots as YAML files."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

import yaml

from organizze.errors import SnapshotError

SNAPSHOT_KEYS: tuple[str, ...] = ("theme", "wallpaper", "opacity")


def save_snapshot(path: Path, snapshot: Mapping[str, Any]) -> Path:
    """Write ``snapshot`` to ``path`` and return the path."""
    data = {key: snapshot[key] for key in SNAPSHOT_KEYS if key in snapshot}
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            yaml.safe_dump(data, default_flow_style=False, allow_unicode=True),
            encoding="utf-8",
        )
    except OSError as exc:
        raise SnapshotError(path, str(exc)) from exc
    return path


def load_snapshot(path: Path) -> dict[str, Any]:
    """Read a snapshot written by ``save_snapshot``.

    Unknown keys are dropped. Fields are not validated here; the store does
    that when the snapshot is imported.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise SnapshotError(path, str(exc)) from exc
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        raise SnapshotError(path, f"invalid YAML: {exc}") from exc
    if not isinstance(data, dict):
        raise SnapshotError(path, "expected a mapping at the top level")
    return {key: data[key] for key in SNAPSHOT_KEYS if key in data}
