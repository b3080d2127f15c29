from pathlib import Path

# Project root = directory holding src/ (only meaningful in a checkout)
PROJECT_ROOT = Path(__file__).resolve().parents[3]

OUTPUT_FILENAME = "tenders-data.json"
CHECKOUT_OUTPUT_PATH = PROJECT_ROOT / OUTPUT_FILENAME


def default_output_path() -> Path:
    """
    tenders-data.json in the current working directory.
    """
    return Path.cwd() / OUTPUT_FILENAME
