import pytest

from config import config_from_dict
from core import run
from core.records import InputError

HEAT_HITS = [
    {"title": "Heat", "releaseYear": 1986, "rottenTomatoes": {"criticsScore": 14, "audienceScore": 22}},
    {"title": "Heat", "releaseYear": 1995, "rottenTomatoes": {"criticsScore": 83, "audienceScore": 94}},
]


def _cfg(delay: float = 1.0):
    return config_from_dict({"rt": {"request_delay_seconds": delay}})


def _fake_search(calls):
    def fetch(title):
        calls.append(title)
        if title == "Heat":
            return HEAT_HITS
        return [{"title": "Heath", "releaseYear": 2001}]

    return fetch


def test_enrich_records_merges_scores(monkeypatch) -> None:
    sleeps = []
    monkeypatch.setattr(run.time, "sleep", lambda seconds: sleeps.append(seconds))
    calls = []
    records = [
        {"Name": "Heat", "Year": "1995", "URL": "u1"},
        {"Name": "9", "Year": "2009", "URL": "u2"},
        {"Name": "Heath Ledger Story", "Year": "2001", "URL": "u3"},
    ]

    rows, summary = run.enrich_records(records, _fake_search(calls), _cfg())

    assert rows[0] == {"Name": "Heat", "Year": "1995", "URL": "u1", "RT": 83, "Audience Score": 94}
    assert rows[1]["RT"] == 57
    assert rows[1]["Audience Score"] == 56
    assert rows[2]["RT"] == ""
    assert rows[2]["Audience Score"] == ""
    assert calls == ["Heat", "Heath Ledger Story"]
    assert sleeps == [1.0, 1.0]
    assert (summary.matched, summary.overridden, summary.missed) == (1, 1, 1)
    assert summary.total == 3
    assert "URL" in records[0] and "RT" not in records[0]


def test_enrich_records_logs_progress_and_misses(monkeypatch, capsys) -> None:
    monkeypatch.setattr(run.time, "sleep", lambda _seconds: None)
    records = [{"Title": "Heath Ledger Story", "Year": "2001"}]

    run.enrich_records(records, _fake_search([]), _cfg())

    out = capsys.readouterr().out
    assert "[1/1]: Fetching scores for Heath Ledger Story (2001)..." in out
    assert "No match for Heath Ledger Story (2001); closest was 'Heath' (2001)" in out


def test_enrich_records_stops_on_missing_year(monkeypatch) -> None:
    monkeypatch.setattr(run.time, "sleep", lambda _seconds: None)
    calls = []
    records = [
        {"Name": "Heat", "Year": "1995"},
        {"Name": "Ran"},
        {"Name": "Heat", "Year": "1995"},
    ]

    with pytest.raises(InputError, match=r"\[2/3\]: No year found for Ran!"):
        run.enrich_records(records, _fake_search(calls), _cfg(delay=0))

    assert calls == ["Heat"]


def test_enrich_records_skips_sleep_without_delay(monkeypatch) -> None:
    def fail_sleep(_seconds):
        raise AssertionError("sleep should not run")

    monkeypatch.setattr(run.time, "sleep", fail_sleep)

    rows, _summary = run.enrich_records([{"Name": "Heat", "Year": 1995}], _fake_search([]), _cfg(delay=0))

    assert rows[0]["RT"] == 83


def test_enrich_records_uses_configured_columns_and_overrides(monkeypatch) -> None:
    monkeypatch.setattr(run.time, "sleep", lambda _seconds: None)
    cfg = config_from_dict(
        {
            "output": {"critics_column": "Critics", "audience_column": "Audience"},
            "overrides": [{"title": "Heat", "year": 1995, "critics": 1, "audience": 2}],
        }
    )

    rows, summary = run.enrich_records([{"name": "Heat", "year": "1995"}], _fake_search([]), cfg)

    assert rows[0]["Critics"] == 1
    assert rows[0]["Audience"] == 2
    assert summary.overridden == 1
