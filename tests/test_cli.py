import json
from typer.testing import CliRunner
from pixelpeek.cli import app

runner = CliRunner()


def write_config(tmp_path):
    path = tmp_path / "pixelpeek.json"
    path.write_text(json.dumps({
        "judge": {"provider": "none"},
        "hints": {"provider": "static"},
        "results_dir": str(tmp_path / "results"),
    }))
    return str(path)


def test_check_exact(tmp_path):
    result = runner.invoke(app, ["check", "Sunset!!", "sunset", "--config", write_config(tmp_path)])
    assert result.exit_code == 0
    assert "EXACT" in result.output


def test_check_rejected_offline(tmp_path):
    result = runner.invoke(app, ["check", "dog", "golden retriever", "--provider", "none",
                                 "--config", str(tmp_path / "missing.json")])
    assert result.exit_code == 0
    assert "REJECTED" in result.output


def test_invalid_config_exits(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json")
    result = runner.invoke(app, ["check", "a", "b", "--config", str(path)])
    assert result.exit_code == 1


def test_replay_command(tmp_path):
    cases = tmp_path / "cases.json"
    cases.write_text(json.dumps([
        {"description": "Orange sky over the sea", "label": "sunset", "guesses": ["Sunset!!"]}
    ]))
    result = runner.invoke(app, ["replay", str(cases), "--config", write_config(tmp_path)])
    assert result.exit_code == 0
    assert "WON" in result.output


def test_stats_command(tmp_path):
    result = runner.invoke(app, ["stats", "--config", write_config(tmp_path)])
    assert result.exit_code == 0
    assert "High score" in result.output
