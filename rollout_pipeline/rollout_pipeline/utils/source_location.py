from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional


@dataclass(frozen=True)
class SourceLocation:
    source_name: Optional[str] = None
    yaml_path: Optional[str] = None
    line: Optional[int] = None  # 1-based
    column: Optional[int] = None  # 1-based


def lookup_source(
    source_map: Optional[Dict[str, Dict[str, int]]],
    yaml_path: Optional[str],
    source_name: Optional[str] = None,
) -> SourceLocation:
    """Find the location of a JSON-pointer path in a source map.

    A path missing from the map (e.g. a required field that is absent) falls
    back to its closest present ancestor.
    """
    if not source_map or yaml_path is None:
        return SourceLocation(source_name=source_name, yaml_path=yaml_path)

    path = yaml_path
    while True:
        entry = source_map.get(path)
        if entry:
            return SourceLocation(
                source_name=source_name,
                yaml_path=yaml_path,
                line=entry.get("line"),
                column=entry.get("column"),
            )
        if not path:
            return SourceLocation(source_name=source_name, yaml_path=yaml_path)
        path = path.rsplit("/", 1)[0]


def format_source(loc: Optional[SourceLocation]) -> str:
    if not loc:
        return ""

    parts = []
    if loc.source_name is not None:
        if loc.line is not None and loc.column is not None:
            parts.append(f"source={loc.source_name}:{loc.line}:{loc.column}")
        elif loc.line is not None:
            parts.append(f"source={loc.source_name}:{loc.line}")
        else:
            parts.append(f"source={loc.source_name}")
    elif loc.line is not None:
        parts.append(f"line={loc.line}")

    if loc.yaml_path:
        parts.append(f"yaml_path={loc.yaml_path}")

    if not parts:
        return ""

    return " (" + " ".join(parts) + ")"
