"""Tests for the ``paraflake`` command-line entry point."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
import yaml

from paraflake.configs.loader import DEFAULT_CONFIG_PATH
from paraflake.scripts.generate import build_argparser, main
from paraflake.utils import logging_config as lc


@pytest.fixture(autouse=True)
def _restore_logging():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)
    lc.pop_context()
    logging.captureWarnings(False)


class TestArgparser:
    def test_defaults(self) -> None:
        args = build_argparser().parse_args([])
        assert args.format == "lines"
        assert args.output is None
        assert args.seed is None

    def test_rejects_unknown_format(self) -> None:
        with pytest.raises(SystemExit):
            build_argparser().parse_args(["--format", "dxf"])


class TestMain:
    def test_lines_to_stdout(self, capsys) -> None:
        rc = main(["--seed", "1", "--arms", "4", "--spikes", "3", "--length", "100"])
        out = capsys.readouterr().out.splitlines()
        assert rc == 0
        assert out[0] == "G1 X3.00 Y1.50"
        assert len(out) == 4 * 23

    def test_same_seed_same_output(self, capsys) -> None:
        main(["--seed", "5"])
        first = capsys.readouterr().out
        main(["--seed", "5"])
        assert capsys.readouterr().out == first

    def test_gcode_file(self, tmp_path: Path) -> None:
        out = tmp_path / "flake.gcode"
        rc = main(["--seed", "2", "--spikes", "2", "--format", "gcode", "-o", str(out)])
        text = out.read_text(encoding="utf-8")
        assert rc == 0
        assert "G21" in text
        assert "; arms=6 length=50 thickness=3 spikes=2" in text
        assert sum(1 for l in text.splitlines() if l.startswith("G1 X")) == 6 * 17 + 1

    def test_svg_file(self, tmp_path: Path) -> None:
        out = tmp_path / "flake.svg"
        assert main(["--seed", "3", "--format", "svg", "-o", str(out)]) == 0
        text = out.read_text(encoding="utf-8")
        assert text.startswith("<?xml")
        assert "<path d=\"M3,1.5 " in text

    def test_preview(self, tmp_path: Path, capsys) -> None:
        png = tmp_path / "flake.png"
        assert main(["--seed", "4", "--preview", str(png)]) == 0
        assert png.exists()

    def test_invalid_override(self, capsys) -> None:
        assert main(["--spikes", "0"]) == 2

    def test_outside_work_area(self, capsys) -> None:
        assert main(["--length", "400", "--format", "gcode"]) == 2

    def test_missing_config(self, tmp_path: Path, capsys) -> None:
        rc = main(["--config", str(tmp_path / "missing.yaml")])
        assert rc == 2
        assert "Configuration error" in capsys.readouterr().err

    def test_malformed_yaml(self, tmp_path: Path, capsys) -> None:
        path = tmp_path / "broken.yaml"
        path.write_text("snowflake: [unclosed\n", encoding="utf-8")
        assert main(["--config", str(path)]) == 2
        assert "Configuration error" in capsys.readouterr().err

    def test_unknown_log_level(self, capsys) -> None:
        assert main(["--log-level", "LOUD"]) == 2
        assert "Unknown log level" in capsys.readouterr().err

    def test_unknown_logging_key(self, tmp_path: Path, capsys) -> None:
        cfg = yaml.safe_load(DEFAULT_CONFIG_PATH.read_text(encoding="utf-8"))
        cfg["logging"] = {"level": "INFO"}
        path = tmp_path / "c.yaml"
        path.write_text(yaml.safe_dump(cfg), encoding="utf-8")

        assert main(["--config", str(path)]) == 2
        assert "Unknown logging key" in capsys.readouterr().err

    def test_custom_config(self, tmp_path: Path, capsys) -> None:
        cfg = {
            "snowflake": {"numArms": 3, "numSpikes": 2},
            "machine": {
                "origin_mm": [50, 50],
                "work_area_mm": [100, 100],
                "z_states": {"travel_mm": 3, "work_mm": 0},
                "feeds": {"draw_mm_s": 10, "travel_mm_s": 50},
            },
            "logging": {"log_level": "WARNING", "color": False},
        }
        path = tmp_path / "c.yaml"
        path.write_text(yaml.safe_dump(cfg), encoding="utf-8")

        assert main(["--config", str(path), "--seed", "0"]) == 0
        assert len(capsys.readouterr().out.splitlines()) == 3 * 17
