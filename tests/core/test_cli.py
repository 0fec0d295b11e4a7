# tests/core/test_cli.py
import json
import random

import pandas as pd
import pytest

from sensei.cli import export_rows, main
from sensei.managers.config_manager import ConfigManager
from sensei.services.placeholder_service import generate_placeholder_report

VALID_HTML = (
    "<html><head><title>Command line page title</title></head>"
    "<body><h1>Hi</h1><img src='x.png'></body></html>"
)


@pytest.fixture(autouse=True)
def fresh_config(tmp_path, monkeypatch):
    monkeypatch.delenv("SENSEI_LOG_LEVEL", raising=False)
    ConfigManager.drop_instance()
    ConfigManager(settings_path=tmp_path / "absent.json")
    yield
    ConfigManager.drop_instance()


def test_audit_prints_reports_and_exports(tmp_path, capsys):
    page = tmp_path / "page.html"
    page.write_text(VALID_HTML, encoding="utf-8")
    export = tmp_path / "issues.csv"

    exit_code = main(["audit", str(page), "--workers", "1", "--export", str(export)])
    reports = json.loads(capsys.readouterr().out)

    assert exit_code == 0
    assert [r["url"] for r in reports] == ["page.html"]

    df = pd.read_csv(export)
    assert set(df["Level"]) == {"document", "element"}
    assert "Image missing alt text" in set(df["Issue"])
    assert len(df) == len(reports[0]["issues"]) + len(reports[0]["elementAnalysis"]["elementIssues"])


def test_audit_flags_placeholders_in_exit_code(tmp_path, capsys):
    bad = tmp_path / "bad.html"
    bad.write_text("<p>no document</p>", encoding="utf-8")

    assert main(["audit", str(bad), "--workers", "1"]) == 2
    assert json.loads(capsys.readouterr().out)[0]["isPlaceholder"] is True


def test_no_subcommand_prints_help(capsys):
    assert main([]) == 1
    assert "seo-sensei" in capsys.readouterr().out


def test_export_rows_skip_missing_element_analysis():
    report = generate_placeholder_report("u", "file", random.Random(0))
    rows = export_rows([report])
    assert len(rows) == len(report.issues)
    assert all(row["Placeholder"] for row in rows)
