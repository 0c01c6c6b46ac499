"""JSON artifact writing."""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Iterable

from .records import record_to_dict


def records_payload(records: Iterable[Any]) -> list:
    return [record_to_dict(record) for record in records]


def write_json(payload: Any, output_dir: Path, filename: str) -> Path:
    """Write `payload` as indented JSON, replacing `filename` in one step."""

    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    out_path = output_dir / filename
    text = json.dumps(payload, ensure_ascii=False, indent=2)

    fd, tmp_name = tempfile.mkstemp(dir=output_dir, prefix=f".{filename}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(text)
        os.replace(tmp_name, out_path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
    return out_path
