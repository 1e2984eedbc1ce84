"""JSON output of query results."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any


def render(data: Any) -> str:
    """Serialize a query result (names, object or object list) to JSON."""
    return json.dumps(data, indent=2, ensure_ascii=False)


def generate(data: Any, output_path: str) -> str:
    """Write a query result to ``output_path`` as JSON.

    Returns:
        Path to the generated JSON file.
    """
    filepath = Path(output_path)
    filepath.parent.mkdir(parents=True, exist_ok=True)
    filepath.write_text(render(data), encoding="utf-8")
    return str(filepath)
