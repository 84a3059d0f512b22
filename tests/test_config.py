import json
from pathlib import Path

import pytest

from heic_converter.config import AppConfig, dump_config, load_config


def test_missing_file_gives_defaults(tmp_path: Path) -> None:
    config = load_config(tmp_path / "absent.toml")
    assert config.conversion.quality == 0.9
    assert config.conversion.target_format == "jpeg"
    assert config.conversion.source_suffix == ".heic"
    assert config.conversion.target_suffix == ".jpg"
    assert config.runtime.log_path is None


def test_load_overrides(tmp_path: Path) -> None:
    path = tmp_path / "config.toml"
    path.write_text(
        "\n".join(
            [
                "[conversion]",
                "quality = 0.75",
                'target_suffix = "jpeg"',
                "[runtime]",
                f'output_dir = "{(tmp_path / "exports").as_posix()}"',
                'log_file = "log.jsonl"',
                'log_level = "debug"',
            ]
        ),
        encoding="utf-8",
    )
    config = load_config(path)
    assert config.conversion.quality == 0.75
    assert config.conversion.target_suffix == ".jpeg"
    assert config.runtime.log_path == tmp_path / "exports" / "log.jsonl"
    assert config.runtime.log_level == "DEBUG"


def test_invalid_quality_is_rejected(tmp_path: Path) -> None:
    path = tmp_path / "config.toml"
    path.write_text("[conversion]\nquality = 1.5\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(path)


def test_dump_config_is_json() -> None:
    payload = json.loads(dump_config(AppConfig()))
    assert payload["conversion"]["quality"] == 0.9
    assert payload["runtime"]["output_dir"] == "converted"
