# src/energy_tenders/pipeline.py

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from energy_tenders.persistence.json_store import save_report
from energy_tenders.persistence.paths import default_output_path
from energy_tenders.services.aggregation import aggregate

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

logger = logging.getLogger(__name__)


def configure_logging(level: int = logging.INFO) -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=LOG_DATEFMT)


def main(output_path: Optional[Path] = None) -> None:
    """
    Fetches the three sources, keeps energy-related tenders and writes
    tenders-data.json (in the working directory unless output_path is given).

    Source failures end up in the report stats; a write failure is raised.
    """
    configure_logging()

    if output_path is None:
        output_path = default_output_path()

    report = aggregate()
    save_report(Path(output_path), report)

    logger.info("Done! %d battery/energy tenders found.", report.total_energy_tenders)


if __name__ == "__main__":
    main()
