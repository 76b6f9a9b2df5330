"""Tests for YAML configuration loading."""
import pytest

from plddt_utils.config import DEFAULTS, load_config


def test_defaults_without_config_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert load_config() == DEFAULTS


def test_default_config_file_is_used(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    config_dir = tmp_path / "plddt-project" / "config"
    config_dir.mkdir(parents=True)
    (config_dir / "filter.yaml").write_text("report_interval: 25\n")
    config = load_config()
    assert config["report_interval"] == 25
    assert config["strict_record_names"] is False


def test_explicit_config(tmp_path):
    path = tmp_path / "filter.yaml"
    path.write_text(
        "report_interval: 10\n"
        "strict_record_names: true\n"
        "suffix: .ent\n"
        "workers: 6\n"
    )
    assert load_config(path) == {
        "report_interval": 10,
        "strict_record_names": True,
        "suffix": ".ent",
        "workers": 6,
    }


def test_empty_config_uses_defaults(tmp_path):
    path = tmp_path / "filter.yaml"
    path.write_text("# nothing set\n")
    assert load_config(path) == DEFAULTS


def test_missing_explicit_config(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "missing.yaml")


@pytest.mark.parametrize("text", [
    "cutoff: 50\n",
    "report_interval: 0\n",
    "report_interval: ten\n",
    "strict_record_names: maybe\n",
    "suffix: ''\n",
    "workers: many\n",
    "- a\n- b\n",
])
def test_invalid_config(tmp_path, text):
    path = tmp_path / "filter.yaml"
    path.write_text(text)
    with pytest.raises(ValueError):
        load_config(path)
