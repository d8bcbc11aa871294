from pathlib import Path

import pytest

from uffio.config import CodecConfig, load_config
from uffio.errors import ConfigError


def test_load_yaml_config(tmp_path: Path) -> None:
    path = tmp_path / "codec.yaml"
    path.write_text("on_malformed: raise\nencoding: ascii\n")
    cfg = load_config(path)
    assert cfg.on_malformed == "raise"
    assert cfg.encoding == "ascii"
    assert cfg.payload_lines == 12


def test_load_json_config(tmp_path: Path) -> None:
    path = tmp_path / "codec.json"
    path.write_text('{"payload_lines": 12, "newline": "\\r\\n"}')
    cfg = load_config(path)
    assert cfg.newline == "\r\n"
    assert cfg.on_malformed == "skip"


def test_empty_yaml_gives_defaults(tmp_path: Path) -> None:
    path = tmp_path / "empty.yml"
    path.write_text("")
    assert load_config(path) == CodecConfig()


def test_invalid_config_is_rejected(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        CodecConfig(on_malformed="ignore")
    with pytest.raises(ConfigError):
        CodecConfig.from_mapping({"colour": "blue"})
    with pytest.raises(ConfigError):
        load_config(tmp_path / "missing.yaml")
    listing = tmp_path / "list.yaml"
    listing.write_text("- a\n- b\n")
    with pytest.raises(ConfigError):
        load_config(listing)


def test_scan_options_from_yaml(tmp_path: Path) -> None:
    path = tmp_path / "codec.yaml"
    path.write_text("sized_payloads: true\nline_width: 132\n")
    cfg = load_config(path)
    assert cfg.sized_payloads is True
    assert cfg.line_width == 132
    assert cfg.scan_options() == {"payload_lines": 12, "sized_payloads": True, "line_width": 132}
    assert CodecConfig().scan_options()["sized_payloads"] is False
    with pytest.raises(ConfigError):
        CodecConfig(line_width=0)
