import sys
from pathlib import Path

import pytest
import yaml
from scripts import run_action_plan

import config_paths


def _write_config(tmp_path: Path) -> Path:
    data_root = Path(__file__).resolve().parents[1] / "data"
    config = {
        "tracker": {
            "emission_factor_files": [
                str(data_root / "emission_factors" / "transport_emission_factors.csv"),
                str(data_root / "emission_factors" / "activity_emission_factors.csv"),
            ],
            "benchmarks_file": str(data_root / "regional_averages.csv"),
            "actions_file": str(data_root / "actions.csv"),
        },
        "results": {"output_directory": "out"},
    }
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump(config), encoding="utf-8")
    return path


def test_get_config_path_honours_env(monkeypatch, tmp_path):
    target = tmp_path / "custom.yaml"
    monkeypatch.setenv(config_paths.CONFIG_ENV_VAR, str(target))

    assert config_paths.get_config_path() == target.resolve()


def test_relative_paths_resolve_against_config(tmp_path):
    config = config_paths.load_config(_write_config(tmp_path))

    assert config_paths.get_config_root(config) == tmp_path.resolve()
    assert config_paths.resolve_data_path(config, "data/x.csv") == (tmp_path / "data" / "x.csv").resolve()
    assert config_paths.get_results_directory(config) == (tmp_path / "out").resolve()


def test_load_config_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError, match="absent.yaml"):
        config_paths.load_config(tmp_path / "absent.yaml")


def test_cli_writes_summary(monkeypatch, tmp_path):
    config_path = _write_config(tmp_path)
    monkeypatch.delenv(config_paths.CONFIG_ENV_VAR, raising=False)
    monkeypatch.setattr(
        sys,
        "argv",
        [
            "run_action_plan.py",
            "--config",
            str(config_path),
            "--select",
            "1",
            "6",
            "--output",
            "plan.txt",
        ],
    )

    assert run_action_plan.main() == 0

    text = (tmp_path / "out" / "plan.txt").read_text(encoding="utf-8")
    assert "SELECTED ACTIONS (2):" in text
    assert "Region: USA" in text


def test_cli_reports_invalid_profile(monkeypatch, tmp_path):
    config_path = _write_config(tmp_path)
    profile_path = tmp_path / "profile.yaml"
    profile_path.write_text(
        yaml.safe_dump({"region": "USA", "commuteMode": "Bus", "dailyCommuteKm": -1}),
        encoding="utf-8",
    )
    monkeypatch.setattr(
        sys,
        "argv",
        ["run_action_plan.py", "--config", str(config_path), "--profile", str(profile_path)],
    )

    assert run_action_plan.main() == 1
