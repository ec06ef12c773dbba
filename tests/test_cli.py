from __future__ import annotations

from pathlib import Path

import pytest
import requests

from placelog.interface import cli


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli, "load_env", lambda: None)
    for key in ("PLACELOG_DB", "PLACELOG_CENTER", "PLACELOG_STORAGE_KEY", "PLACELOG_MAP_ZOOM"):
        monkeypatch.delenv(key, raising=False)


def _run(db: Path, *args: str) -> int:
    return cli.main(["--dbpath", str(db), "--center", "38.7,-9.1", *args])


def test_add_list_delete_round_trip(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    db = tmp_path / "places.db"

    assert _run(db, "add", "--location", "Lisbon", "--companion", "myself", "--rating", "5") == 0
    added = capsys.readouterr().out
    assert "[ADDED]" in added
    identity = added.split("[ADDED] ", 1)[1].split(" |", 1)[0]

    assert _run(db, "add", "--type", "planned", "--at", "35.0,135.7", "--location", "Kyoto", "--date", "2027-04-01") == 0
    kyoto = capsys.readouterr().out.split("[ADDED] ", 1)[1].split(" |", 1)[0]

    assert _run(db, "list") == 0
    listing = capsys.readouterr().out.splitlines()
    assert len(listing) == 2
    assert listing[0].startswith(f"{identity} | Visited Lisbon - ")
    assert "Planning to visit Kyoto" in listing[1]

    assert _run(db, "focus", "--id", kyoto) == 0
    assert f"[FOCUS] {kyoto} -> 35.0,135.7" in capsys.readouterr().out

    assert _run(db, "delete", "--id", identity) == 0
    capsys.readouterr()
    assert _run(db, "list") == 0
    assert len(capsys.readouterr().out.splitlines()) == 1


def test_invalid_input_exits_non_zero(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    db = tmp_path / "places.db"

    assert _run(db, "add", "--location", "Rome", "--rating", "7") == 1
    assert "Rating must be between 1 and 5." in capsys.readouterr().err


def test_delete_unknown_id(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert _run(tmp_path / "places.db", "delete", "--id", "nope") == 1
    assert "No place with id nope" in capsys.readouterr().err


def test_export_html_and_reset(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    db = tmp_path / "places.db"
    out = tmp_path / "list.html"
    _run(db, "add", "--location", "Porto", "--rating", "4")

    assert _run(db, "export-html", "--out", str(out)) == 0
    assert "Visited Porto" in out.read_text(encoding="utf-8")

    assert _run(db, "reset") == 0
    capsys.readouterr()
    _run(db, "list")
    assert capsys.readouterr().out == ""


def test_bad_center_is_reported(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = cli.main(["--dbpath", str(tmp_path / "p.db"), "--center", "nowhere", "list"])
    assert code == 2
    assert "Invalid position" in capsys.readouterr().err


def test_add_at_position_works_without_network(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    calls = {"n": 0}

    def offline_get(*args, **kwargs):
        calls["n"] += 1
        raise requests.ConnectionError("offline")

    monkeypatch.setattr(requests, "get", offline_get)
    db = tmp_path / "places.db"

    code = cli.main(
        ["--dbpath", str(db), "add", "--at", "38.7,-9.1", "--location", "Lisbon", "--rating", "5"]
    )

    assert code == 0
    assert calls["n"] == 0
    captured = capsys.readouterr()
    assert "[ADDED]" in captured.out
    assert "Unable to get your location." not in captured.err
