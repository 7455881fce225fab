import json

import requests

from bread.api import RetrievalError
from bread.batch import BatchStats, run_batch
from bread.model import Passage, ScheduleEntry
from bread.store import passage_path

HTML = '<p class="p"><span data-number="1" class="v">1</span>In the beginning</p>'


class RecordingFetcher:
    def __init__(self, failures=None):
        self.failures = failures or {}
        self.calls = []

    def __call__(self, passage_id, config):
        self.calls.append(passage_id)
        if passage_id in self.failures:
            raise self.failures[passage_id]
        return Passage(content=HTML, copyright="(c) test")


def entries(*pairs):
    return [ScheduleEntry(date, ref, i) for i, (date, ref) in enumerate(pairs, start=2)]


def test_fetches_cleans_and_writes(run_config):
    fetch = RecordingFetcher()
    sleeps = []
    stats = run_batch(
        run_config,
        entries(("2026-01-01", "Genesis 1:1-31"), ("2026-01-02", "Psalm 32")),
        fetch=fetch,
        sleep=sleeps.append,
    )

    assert (stats.fetched, stats.skipped, stats.errors) == (2, 0, 0)
    assert fetch.calls == ["GEN.1.1-GEN.1.31", "PSA.32"]
    assert sleeps == [0.5, 0.5]

    saved = json.loads(passage_path(run_config.out_dir, "2026-01-01").read_text(encoding="utf-8"))
    assert saved == {"verses": "<p><sup>1</sup>In the beginning</p>", "copyright": "(c) test"}


def test_existing_file_is_skipped_and_untouched(run_config):
    run_config.out_dir.mkdir(parents=True)
    existing = passage_path(run_config.out_dir, "2026-01-01")
    existing.write_text('{"verses": "kept", "copyright": ""}', encoding="utf-8")
    before = existing.read_bytes()

    fetch = RecordingFetcher()
    stats = run_batch(
        run_config, entries(("2026-01-01", "Psalm 32")), fetch=fetch, sleep=lambda s: None
    )

    assert (stats.fetched, stats.skipped, stats.errors) == (0, 1, 0)
    assert fetch.calls == []
    assert existing.read_bytes() == before


def test_per_entry_errors_do_not_stop_the_batch(run_config, capsys):
    fetch = RecordingFetcher(
        failures={
            "ROM.8.1-ROM.8.17": RetrievalError(404, "not found"),
            "PSA.1": requests.ConnectionError("connection reset"),
        }
    )
    sleeps = []
    stats = run_batch(
        run_config,
        entries(
            ("2026-01-01", "NotABook 3"),
            ("2026-01-02", "Romans 8:1-17"),
            ("2026-01-03", "Psalm 1"),
            ("2026-01-04", "Psalm 2"),
        ),
        fetch=fetch,
        sleep=sleeps.append,
    )

    assert (stats.fetched, stats.skipped, stats.errors) == (1, 0, 3)
    assert sleeps == [0.5]
    assert not passage_path(run_config.out_dir, "2026-01-02").exists()
    assert passage_path(run_config.out_dir, "2026-01-04").exists()

    captured = capsys.readouterr()
    assert 'Skipping 2026-01-01: could not parse "NotABook 3"' in captured.out
    assert "API error 404: not found" in captured.err
    assert "connection reset" in captured.err
    assert "Done! Fetched: 1, Skipped (already exists): 0, Errors: 3" in captured.out


def test_counts_add_up_over_a_rerun(run_config):
    plan = entries(
        ("2026-01-01", "Psalm 32"),
        ("2026-01-02", "Nope 1"),
        ("2026-01-03", "Philemon 1-25"),
    )
    first = run_batch(run_config, plan, fetch=RecordingFetcher(), sleep=lambda s: None)
    second = run_batch(run_config, plan, fetch=RecordingFetcher(), sleep=lambda s: None)

    assert first.total == second.total == len(plan)
    assert (second.fetched, second.skipped, second.errors) == (0, 2, 1)


def test_limit_stops_after_n_fetches(run_config):
    fetch = RecordingFetcher()
    stats = run_batch(
        run_config,
        entries(("2026-01-01", "Psalm 1"), ("2026-01-02", "Psalm 2"), ("2026-01-03", "Psalm 3")),
        fetch=fetch,
        sleep=lambda s: None,
        limit=2,
    )
    assert stats.fetched == 2
    assert fetch.calls == ["PSA.1", "PSA.2"]


def test_dry_run_fetches_nothing(run_config):
    fetch = RecordingFetcher()
    stats = run_batch(
        run_config,
        entries(("2026-01-01", "Psalm 1"), ("2026-01-02", "Bogus")),
        fetch=fetch,
        sleep=lambda s: None,
        dry_run=True,
    )
    assert fetch.calls == []
    assert (stats.fetched, stats.skipped, stats.errors) == (0, 1, 1)
    assert list(run_config.out_dir.iterdir()) == []


def test_zero_delay_never_sleeps(run_config):
    from dataclasses import replace

    config = replace(run_config, delay=0)
    sleeps = []
    run_batch(config, entries(("2026-01-01", "Psalm 1")), fetch=RecordingFetcher(), sleep=sleeps.append)
    assert sleeps == []


def test_batch_stats_summary():
    stats = BatchStats(fetched=3, skipped=2, errors=1)
    assert stats.total == 6
    assert stats.summary() == "Done! Fetched: 3, Skipped (already exists): 2, Errors: 1"


class NullContentSession:
    status_code = 200
    text = '{"data":{"content":null}}'

    def get(self, url, headers=None, params=None, timeout=None):
        return self

    def json(self):
        return {"data": {"content": None}}


def test_null_content_payload_is_counted_not_fatal(run_config, capsys):
    from bread.api import fetch_passage

    session = NullContentSession()
    stats = run_batch(
        run_config,
        entries(("2026-01-01", "Psalm 1"), ("2026-01-02", "Psalm 2")),
        fetch=lambda passage_id, config: fetch_passage(passage_id, config, session=session),
        sleep=lambda s: None,
    )

    assert (stats.fetched, stats.skipped, stats.errors) == (0, 0, 2)
    assert list(run_config.out_dir.iterdir()) == []
    captured = capsys.readouterr()
    assert "unexpected payload" in captured.err
    assert "Done! Fetched: 0, Skipped (already exists): 0, Errors: 2" in captured.out


def test_write_failure_is_logged_counted_and_batch_continues(run_config, monkeypatch, capsys):
    from bread import store

    real_write = store.write_passage

    def flaky_write(out_dir, date, record):
        if date == "2026-01-01":
            raise OSError(28, "No space left on device")
        return real_write(out_dir, date, record)

    monkeypatch.setattr("bread.batch.write_passage", flaky_write)
    stats = run_batch(
        run_config,
        entries(("2026-01-01", "Psalm 1"), ("2026-01-02", "Psalm 2")),
        fetch=RecordingFetcher(),
        sleep=lambda s: None,
    )

    assert (stats.fetched, stats.skipped, stats.errors) == (1, 0, 1)
    assert not passage_path(run_config.out_dir, "2026-01-01").exists()
    assert passage_path(run_config.out_dir, "2026-01-02").exists()
    assert "No space left on device" in capsys.readouterr().err


def test_failed_write_is_retried_on_next_run(run_config):
    class SurrogateFetcher(RecordingFetcher):
        def __call__(self, passage_id, config):
            self.calls.append(passage_id)
            return Passage(content="<p>bad \ud800</p>", copyright="")

    plan = entries(("2026-01-01", "Psalm 1"))
    first = run_batch(run_config, plan, fetch=SurrogateFetcher(), sleep=lambda s: None)
    assert (first.fetched, first.skipped, first.errors) == (0, 0, 1)
    assert list(run_config.out_dir.iterdir()) == []

    second = run_batch(run_config, plan, fetch=RecordingFetcher(), sleep=lambda s: None)
    assert (second.fetched, second.skipped, second.errors) == (1, 0, 0)
