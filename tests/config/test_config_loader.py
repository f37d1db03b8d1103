from __future__ import annotations

from pathlib import Path

import pytest

from lossy_lines.config.loader import ConfigError, load_config, parse_config
from lossy_lines.config.models import AppConfig


def _write(tmp_path: Path, lines: list[str]) -> Path:
    path = tmp_path / "config.yml"
    path.write_text("\n".join(lines), encoding="utf-8")
    return path


def test_load_config_happy_path(tmp_path: Path) -> None:
    # Full config maps each section to typed adapter selections.
    path = _write(
        tmp_path,
        [
            "version: 1",
            "source:",
            "  kind: file",
            "  settings:",
            "    path: /var/log/app.log",
            "sink:",
            "  kind: file",
            "  settings:",
            "    path: out.txt",
            "    atomic_replace: true",
            "logging:",
            "  level: debug",
            "  sink:",
            "    kind: jsonl",
            "    settings:",
            "      path: run.jsonl",
        ],
    )
    cfg = load_config(path)
    assert isinstance(cfg, AppConfig)
    assert cfg.source.kind == "file"
    assert cfg.source.settings == {"path": "/var/log/app.log"}
    assert cfg.sink.settings["atomic_replace"] is True
    assert cfg.logging.level == "debug"
    assert cfg.logging.sink.kind == "jsonl"


def test_empty_config_uses_stdio_defaults(tmp_path: Path) -> None:
    # Every section is optional: stdin -> stdout with info logs on stderr.
    cfg = load_config(_write(tmp_path, [""]))
    assert cfg.version == 1
    assert cfg.source.kind == "stdin"
    assert cfg.sink.kind == "stdout"
    assert cfg.logging.level == "info"
    assert cfg.logging.sink.kind == "stderr"


def test_unknown_top_level_key_fails(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        load_config(_write(tmp_path, ["version: 1", "encoding: latin-1"]))


def test_unknown_log_level_fails() -> None:
    with pytest.raises(ConfigError):
        parse_config({"logging": {"level": "loud"}})


def test_adapter_section_requires_kind() -> None:
    with pytest.raises(ConfigError):
        parse_config({"source": {"settings": {"path": "x"}}})


def test_non_mapping_root_fails(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        load_config(_write(tmp_path, ["- a", "- b"]))


def test_invalid_yaml_fails(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        load_config(_write(tmp_path, ["source: [unclosed"]))


def test_config_file_must_be_strict_utf8(tmp_path: Path) -> None:
    # Settings are not read lossily; a corrupt config is rejected.
    path = tmp_path / "config.yml"
    path.write_bytes(b"version: 1\n# \xff\n")
    with pytest.raises(ConfigError):
        load_config(path)
