from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Sequence

from exact_tsp.data.schemas import Instance, SolveRecord, record_to_dict
from exact_tsp.errors import InputError


def _ensure_parent(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)


def load_instance_json(path: str | Path) -> Instance:
    """Read an instance from JSON.

    Accepts either a bare list of rows or an object with a ``distances`` key
    and an optional ``name``.
    """
    source = Path(path)
    try:
        text = source.read_text(encoding="utf-8")
    except OSError as exc:
        raise InputError(f"{source}: cannot read ({exc.strerror or exc})") from exc
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise InputError(f"{source}: not valid JSON") from exc
    if isinstance(payload, dict):
        if "distances" not in payload:
            raise InputError(f"{source}: missing 'distances' key")
        return Instance(distances=payload["distances"], name=payload.get("name") or source.stem)
    return Instance(distances=payload, name=source.stem)


def write_instance_json(path: str | Path, instance: Instance) -> None:
    target = Path(path)
    _ensure_parent(target)
    payload = {"name": instance.name, "distances": [list(row) for row in instance.distances]}
    with target.open("w", encoding="utf-8") as handle:
        json.dump(payload, handle, indent=2, allow_nan=False)


def write_records_jsonl(path: str | Path, records: Sequence[SolveRecord]) -> None:
    target = Path(path)
    _ensure_parent(target)
    with target.open("w", encoding="utf-8") as handle:
        for record in records:
            payload = record_to_dict(record)
            handle.write(json.dumps(payload, sort_keys=True, separators=(",", ":"), allow_nan=False))
            handle.write("\n")


def read_records_jsonl(path: str | Path) -> List[Dict[str, Any]]:
    with Path(path).open("r", encoding="utf-8") as handle:
        return [json.loads(line) for line in handle if line.strip()]


def write_manifest(
    directory: str | Path,
    meta: Dict[str, Any],
    *,
    filename: str = "manifest.json",
) -> Path:
    target = Path(directory) / filename
    _ensure_parent(target)
    payload = dict(meta)
    payload.setdefault("generated_at", datetime.now(timezone.utc).isoformat())
    with target.open("w", encoding="utf-8") as handle:
        json.dump(payload, handle, indent=2, sort_keys=True, allow_nan=False)
    return target


__all__ = [
    "load_instance_json",
    "write_instance_json",
    "write_records_jsonl",
    "read_records_jsonl",
    "write_manifest",
]
