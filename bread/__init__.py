"""
bread - reading plan passage cache

This package turns the BREAD reading plan (date -> scripture reference) into
one cached JSON passage per day, fetched from API.Bible:
- config: Version, translations, run configuration
- paths: Default paths and output directory setup
- util: Console output helpers
- books: Book name -> API.Bible book id
- reference: Citation parser
- clean: API.Bible HTML -> display text
- api: Passage fetcher
- schedule: Reading plan reader (.csv / .xlsx)
- store: <date>.json records
- batch: Batch driver
- status: Cache status report
"""

from . import config
from .paths import PROJECT_ROOT, SCHEDULE_PATH, PASSAGES_DIR, ensure_output_dir
from .util import info, warn, ok, error
from .config import RunConfig, ConfigError, build_run_config
from .reference import parse_reference, parse_passage_ref
from .clean import clean_html
from .api import RetrievalError, fetch_passage
from .schedule import read_schedule
from .batch import BatchStats, run_batch

__version__ = config.__version__
__all__ = [
    "config",
    "PROJECT_ROOT",
    "SCHEDULE_PATH",
    "PASSAGES_DIR",
    "ensure_output_dir",
    "info",
    "warn",
    "ok",
    "error",
    "RunConfig",
    "ConfigError",
    "build_run_config",
    "parse_reference",
    "parse_passage_ref",
    "clean_html",
    "RetrievalError",
    "fetch_passage",
    "read_schedule",
    "BatchStats",
    "run_batch",
]
