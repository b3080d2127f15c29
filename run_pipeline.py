# run_pipeline.py
from __future__ import annotations

import sys
from datetime import datetime
from pathlib import Path

ROOT = Path(__file__).resolve().parent
SRC_DIR = ROOT / "src"

# Lets the launcher run from a checkout without `pip install -e .`
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from energy_tenders.persistence.paths import CHECKOUT_OUTPUT_PATH  # noqa: E402
from energy_tenders.pipeline import main as run  # noqa: E402


def _file_stamp(path: Path):
    # save_report renames a fresh file into place, so the inode changes too
    if not path.is_file():
        return None
    st = path.stat()
    return (st.st_ino, st.st_mtime_ns)


def main() -> None:
    print("============================================")
    print("  UK energy / battery tender watch")
    print("============================================")
    print(f"Project root : {ROOT}")
    print(f"Date/time    : {datetime.now().isoformat(timespec='seconds')}")

    before = _file_stamp(CHECKOUT_OUTPUT_PATH)
    run(output_path=CHECKOUT_OUTPUT_PATH)
    after = _file_stamp(CHECKOUT_OUTPUT_PATH)

    if after is None or after == before:
        raise RuntimeError(f"Output file was not written: {CHECKOUT_OUTPUT_PATH}")

    print("\nPipeline finished.")
    print(f"   Output file : {CHECKOUT_OUTPUT_PATH}")


if __name__ == "__main__":
    try:
        main()
    except Exception as e:
        print("\nPIPELINE ERROR:", e)
        sys.exit(1)
