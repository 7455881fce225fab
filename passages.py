#!/usr/bin/env python
"""
passages.py – unified CLI for the reading plan passage cache

Commands:

  API_BIBLE_KEY=... python passages.py fetch [niv|msg]
      Fetch every schedule date not yet cached into public/passages/<translation>/

  python passages.py parse "John 9:1-12, 35-41" "Psalm 32"
      Show the API.Bible passage id for each reference

  python passages.py clean path/to/passage.html
      Print the cleaned display text for a saved API.Bible HTML fragment

  python passages.py translations
      List available translations

  python passages.py status [--translation niv]
      Show cached counts and missing schedule dates
"""

import argparse
import sys
from pathlib import Path

from bread.paths import SCHEDULE_PATH, PASSAGES_DIR
from bread.util import info, ok, warn, error
from bread import config
from bread.config import ConfigError, build_run_config, resolve_translation
from bread.reference import parse_passage_ref
from bread.clean import clean_html
from bread.schedule import read_schedule
from bread.batch import run_batch
from bread.status import print_status


# ---------- Command handlers ----------


def cmd_fetch(args: argparse.Namespace) -> int:
    """
    Resolve the run configuration, then fill the cache for every schedule date.
    """
    run_config = build_run_config(
        translation=args.translation,
        api_key=args.api_key,
        passages_dir=Path(args.passages_dir),
        delay=args.delay,
        timeout=args.timeout,
    )

    info(f"Translation : {run_config.translation} ({run_config.bible_id})")
    info(f"Schedule    : {args.schedule}")
    info(f"Output dir  : {run_config.out_dir}")

    entries = read_schedule(Path(args.schedule), sheet_name=args.sheet)
    stats = run_batch(run_config, entries, limit=args.limit, dry_run=args.dry_run)
    if stats.errors:
        warn(f"{stats.errors} date(s) failed; re-run to retry them.")
    else:
        ok(f"Cache up to date in {run_config.out_dir}")
    return 0


def cmd_parse(args: argparse.Namespace) -> int:
    """
    Print the passage id for each reference; non-zero exit if any fail.
    """
    failures = 0
    for ref in args.refs:
        passage_id = parse_passage_ref(ref)
        if passage_id is None:
            warn(f"{ref!r}: could not parse")
            failures += 1
        else:
            print(f"{ref} -> {passage_id}")
    return 1 if failures else 0


def cmd_clean(args: argparse.Namespace) -> int:
    html_path = Path(args.file)
    if not html_path.exists():
        raise FileNotFoundError(f"HTML file not found: {html_path}")
    print(clean_html(html_path.read_text(encoding="utf-8")))
    return 0


def cmd_translations(args: argparse.Namespace) -> int:
    info("Available translations:")
    for name, bible_id in config.BIBLE_IDS.items():
        marker = " (default)" if name == config.DEFAULT_TRANSLATION else ""
        print(f"  - {name}: {bible_id}{marker}")
    return 0


def cmd_status(args: argparse.Namespace) -> int:
    translation = resolve_translation(args.translation) if args.translation else None
    schedule_path = Path(args.schedule)

    entries = None
    if schedule_path.exists():
        entries = read_schedule(schedule_path)
    else:
        warn(f"Schedule not found: {schedule_path}; skipping missing-date check.")

    print_status(Path(args.passages_dir), entries, translation=translation)
    return 0


# ---------- Parser ----------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="passages.py",
        description="Reading plan passage cache (API.Bible)",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {config.__version__}"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # fetch
    p_fetch = sub.add_parser(
        "fetch",
        help="Fetch uncached schedule passages from API.Bible",
    )
    p_fetch.add_argument(
        "translation",
        nargs="?",
        default=config.DEFAULT_TRANSLATION,
        help=f"Translation name ({', '.join(config.BIBLE_IDS)}; default: {config.DEFAULT_TRANSLATION})",
    )
    p_fetch.add_argument(
        "--schedule",
        type=str,
        default=str(SCHEDULE_PATH),
        help="Reading plan .csv or .xlsx (default: BREAD_2026_Reading_Plan.csv)",
    )
    p_fetch.add_argument(
        "--sheet",
        type=str,
        default=None,
        help="Worksheet name for .xlsx schedules (default: active sheet)",
    )
    p_fetch.add_argument(
        "--passages-dir",
        type=str,
        default=str(PASSAGES_DIR),
        help="Root output directory (default: public/passages)",
    )
    p_fetch.add_argument(
        "--api-key",
        type=str,
        default=None,
        help=f"API.Bible key (or set {config.API_KEY_ENV})",
    )
    p_fetch.add_argument(
        "--delay",
        type=float,
        default=config.DEFAULT_DELAY,
        help=f"Seconds to pause after each fetch (default: {config.DEFAULT_DELAY})",
    )
    p_fetch.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Per-request timeout in seconds (default: none)",
    )
    p_fetch.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Stop after this many fetches",
    )
    p_fetch.add_argument(
        "--dry-run",
        action="store_true",
        help="Parse references and report, without fetching",
    )
    p_fetch.set_defaults(func=cmd_fetch)

    # parse
    p_parse = sub.add_parser("parse", help="Show API.Bible passage ids for references")
    p_parse.add_argument("refs", nargs="+", help="Reference strings, e.g. 'Romans 8:1-17'")
    p_parse.set_defaults(func=cmd_parse)

    # clean
    p_clean = sub.add_parser("clean", help="Clean a saved API.Bible HTML fragment")
    p_clean.add_argument("file", type=str, help="Path to an HTML file")
    p_clean.set_defaults(func=cmd_clean)

    # translations
    p_tr = sub.add_parser("translations", help="List available translations")
    p_tr.set_defaults(func=cmd_translations)

    # status
    p_status = sub.add_parser("status", help="Show cached passage counts and missing dates")
    p_status.add_argument("--schedule", type=str, default=str(SCHEDULE_PATH))
    p_status.add_argument("--passages-dir", type=str, default=str(PASSAGES_DIR))
    p_status.add_argument("--translation", type=str, default=None)
    p_status.set_defaults(func=cmd_status)

    return parser


# ---------- Main ----------


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        return args.func(args)
    except ConfigError as e:
        error(str(e))
        return 1
    except (FileNotFoundError, ValueError) as e:
        error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
