from __future__ import annotations

import json
from pathlib import Path

import pytest

from engagement_dashboard import cli


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli, "configure_logging", lambda *args, **kwargs: None)


def test_summary_prints_json(sample_csv: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["summary", str(sample_csv)]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["current_fy"] == 2025
    assert payload["fiscal_years"] == [2024, 2025]


def test_goals_monthly_view(sample_csv: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["goals", str(sample_csv), "--year", "2024", "--view", "monthly"]) == 0
    out = capsys.readouterr().out
    assert "FY24 goal 1.0M" in out
    assert "monthly_goal" in out


def test_projections(sample_csv: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["projections", str(sample_csv)]) == 0
    out = capsys.readouterr().out
    assert "FY25: 2 months reported" in out
    assert "Stretch (+20%)" in out


def test_unreadable_file_exits_nonzero(tmp_path: Path) -> None:
    path = tmp_path / "notes.txt"
    path.write_text("hello", encoding="utf-8")
    assert cli.main(["summary", str(path)]) == 1


def test_file_without_fiscal_years_exits_nonzero(tmp_path: Path) -> None:
    path = tmp_path / "blank.csv"
    path.write_text("FiscalYear,MonthNum,Total\n,1,10\n", encoding="utf-8")
    assert cli.main(["summary", str(path)]) == 1


def test_help_exits_before_logging_is_configured(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    calls: list[tuple] = []
    monkeypatch.setattr(cli, "configure_logging", lambda *args, **kwargs: calls.append(args))
    monkeypatch.chdir(tmp_path)
    with pytest.raises(SystemExit) as info:
        cli.main(["--help"])
    assert info.value.code == 0
    assert calls == []
    assert not (tmp_path / "logs").exists()
