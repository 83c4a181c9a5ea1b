import json
import logging
from pathlib import Path

from typer.testing import CliRunner

from cafarank.cli import app

runner = CliRunner()


def _write_inputs(tmp_path: Path):
    roster = tmp_path / "team_info.txt"
    roster.write_text(
        "\n".join([
            "M001 ALPHA-1 alpha q Alpha Smith",
            "M002 BETA-1 beta q Beta Jones",
            "BN4S NAIVE-1 base n Naive Organizers",
            "BB4S BLAST-1 base b BLAST Organizers",
        ]),
        encoding="utf-8",
    )
    stats = tmp_path / "smin.json"
    stats.write_text(json.dumps([
        {"id": mid, "smin_bst": [s, s], "coverage_bst": [0.5, 0.5], "ncovered_bst": [20, 20]}
        for mid, s in [("M001", 0.4), ("M002", 0.3), ("BN4S", 0.7), ("BB4S", 0.6)]
    ]), encoding="utf-8")
    return roster, stats


def test_select_writes_reports(tmp_path: Path):
    roster, stats = _write_inputs(tmp_path)
    out = tmp_path / "report.json"
    md = tmp_path / "report.md"
    result = runner.invoke(app, [
        "select", str(roster), str(stats),
        "--naive", "BN4S", "--blast", "BB4S", "-k", "2",
        "--json", str(out), "--markdown", str(md),
    ])
    assert result.exit_code == 0, result.output
    assert json.loads(out.read_text(encoding="utf-8"))["selected_ids"] == ["M002", "M001"]
    assert md.exists()


def test_select_warns_when_degraded(tmp_path: Path):
    roster, stats = _write_inputs(tmp_path)
    result = runner.invoke(app, ["select", str(roster), str(stats), "--naive", "BN4S", "--blast", "BB4S"])
    assert result.exit_code == 0
    assert "only selected 2 models" in result.output


def test_select_missing_reference_exits_nonzero(tmp_path: Path):
    roster, stats = _write_inputs(tmp_path)
    result = runner.invoke(app, ["select", str(roster), str(stats), "--naive", "BN4S", "--blast", "XXXX"])
    assert result.exit_code == 1
    assert "not in the evaluation pool" in result.output


def test_filter_auc(tmp_path: Path):
    aucs = tmp_path / "aucs.json"
    aucs.write_text(json.dumps([
        {"id": "M001", "term": ["GO:1", "GO:2"], "auc": [None, 0.5]},
        {"id": "M002", "term": ["GO:1"], "auc": [0.51]},
        {"id": "BN4S", "term": ["GO:1"], "auc": [0.8]},
    ]), encoding="utf-8")
    out = tmp_path / "kept.json"
    result = runner.invoke(app, ["filter-auc", str(aucs), "-o", str(out)])
    assert result.exit_code == 0, result.output
    assert json.loads(out.read_text(encoding="utf-8")) == {"kept": ["M002"], "dropped": ["M001", "BN4S"]}


def test_version():
    result = runner.invoke(app, ["version"])
    assert "cafarank v" in result.output


def test_run_from_config(tmp_path: Path):
    _write_inputs(tmp_path)
    config = tmp_path / "run.json"
    config.write_text(json.dumps({
        "roster_path": "team_info.txt",
        "stats_path": "smin.json",
        "references": {"naive": "BN4S", "blast": "BB4S"},
        "curation": {"top_k": 1},
    }), encoding="utf-8")
    out = tmp_path / "report.json"
    result = runner.invoke(app, ["run", str(config), "--json", str(out)])
    assert result.exit_code == 0, result.output
    assert json.loads(out.read_text(encoding="utf-8"))["selected_ids"] == ["M002"]


def test_select_rejects_same_reference_twice(tmp_path: Path):
    roster, stats = _write_inputs(tmp_path)
    result = runner.invoke(app, ["select", str(roster), str(stats), "--naive", "BN4S", "--blast", "BN4S"])
    assert result.exit_code == 1


def _write_aucs(tmp_path: Path) -> Path:
    aucs = tmp_path / "aucs.json"
    aucs.write_text(json.dumps([
        {"id": "XB1", "term": ["GO:1"], "auc": [0.9]},
        {"id": "B2", "term": ["GO:1"], "auc": [0.9]},
    ]), encoding="utf-8")
    return aucs


def test_filter_auc_baseline_marker_option(tmp_path: Path):
    out = tmp_path / "kept.json"
    result = runner.invoke(app, ["filter-auc", str(_write_aucs(tmp_path)), "--baseline-marker", "X", "-o", str(out)])
    assert result.exit_code == 0, result.output
    assert json.loads(out.read_text(encoding="utf-8"))["kept"] == ["B2"]


def test_filter_auc_policy_from_run_config(tmp_path: Path):
    config = tmp_path / "run.json"
    config.write_text(json.dumps({
        "references": {"naive": "BN4S", "blast": "BB4S"},
        "curation": {"baseline_marker": "X"},
    }), encoding="utf-8")
    out = tmp_path / "kept.json"
    result = runner.invoke(app, ["filter-auc", str(_write_aucs(tmp_path)), "-c", str(config), "-o", str(out)])
    assert result.exit_code == 0, result.output
    assert json.loads(out.read_text(encoding="utf-8")) == {"kept": ["B2"], "dropped": ["XB1"]}


def test_select_quiet(tmp_path: Path):
    roster, stats = _write_inputs(tmp_path)
    logger = logging.getLogger("cafarank")
    result = runner.invoke(app, ["select", str(roster), str(stats), "--naive", "BN4S", "--blast", "BB4S", "-q"])
    level = logger.level
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    assert result.exit_code == 0, result.output
    assert "Top 10" in result.output
    assert level == logging.ERROR
