"""
Path configuration for the reading plan passage cache.
"""

from pathlib import Path

# Project root is one level up from bread/
PROJECT_ROOT = Path(__file__).parent.parent
SCHEDULE_PATH = PROJECT_ROOT / "BREAD_2026_Reading_Plan.csv"
PASSAGES_DIR = PROJECT_ROOT / "public" / "passages"


def translation_dir(passages_dir: Path, translation: str) -> Path:
    """Output directory for one translation, e.g. public/passages/niv."""
    return Path(passages_dir) / translation.lower()


def ensure_output_dir(out_dir: Path) -> Path:
    """
    Ensure the per-translation output directory exists (parents included).
    """
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    return out_dir
