# src/energy_tenders/persistence/json_store.py

from __future__ import annotations

import json
import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import Any, Dict

from energy_tenders.models.normalized import AggregateReport

logger = logging.getLogger(__name__)


def _target_mode(path: Path) -> int:
    """
    Mode of the file being replaced, or 0666 minus the umask for a new file
    (what a plain open(path, "w") would give).
    """
    if path.exists():
        return stat.S_IMODE(path.stat().st_mode)

    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def save_report(path: Path, report: AggregateReport) -> None:
    """
    Writes the report as indented JSON (2 spaces), replacing any previous file.

    The document is written to a temporary file in the same directory, then
    renamed over `path`, so readers never see a half-written file.
    """
    payload = report.to_dict()

    tmp_name = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as f:
            tmp_name = f.name
            json.dump(payload, f, ensure_ascii=False, indent=2)
        # NamedTemporaryFile is created 0600; the report must stay readable
        os.chmod(tmp_name, _target_mode(path))
        os.replace(tmp_name, path)
    except OSError as exc:
        logger.error("Error writing JSON file %s: %s", path, exc)
        if tmp_name and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise

    logger.info("Report written to %s (%d tenders)", path, report.total_energy_tenders)


def load_report(path: Path) -> Dict[str, Any]:
    """
    Reads back a report written by save_report.
    """
    return json.loads(path.read_text(encoding="utf-8"))
