"""Tests for the command line interface."""

import pytest
from PIL import Image

from lifelike.main import main

BLINKER_RLE = "#N Blinker\nx = 3, y = 1, rule = B3/S23\n3o!\n"


@pytest.fixture
def blinker_file(tmp_path):
    path = tmp_path / "blinker.rle"
    path.write_text(BLINKER_RLE)
    return path


class TestRun:
    def test_run_file(self, blinker_file, capsys) -> None:
        main(["run", str(blinker_file), "--steps", "4", "--every", "2"])
        out = capsys.readouterr().out
        assert "B3/S23" in out
        assert "Total births: 8" in out
        assert "Total deaths: 8" in out

    def test_run_library_pattern(self, capsys) -> None:
        main(["run", "block", "--steps", "3"])
        out = capsys.readouterr().out
        assert "Total births: 0" in out

    def test_run_with_rule(self, blinker_file, capsys) -> None:
        main(["run", str(blinker_file), "--rule", "B36/S23", "--steps", "1"])
        assert "B36/S23" in capsys.readouterr().out

    def test_bad_rle_exits(self, tmp_path, capsys) -> None:
        path = tmp_path / "bad.rle"
        path.write_text("3o!\n")
        with pytest.raises(SystemExit) as exc:
            main(["run", str(path)])
        assert exc.value.code == 1
        assert "Error loading pattern" in capsys.readouterr().out

    def test_unknown_pattern_exits(self) -> None:
        with pytest.raises(SystemExit) as exc:
            main(["run", "definitely-not-here"])
        assert exc.value.code == 1

    def test_bad_rule_exits(self, blinker_file) -> None:
        with pytest.raises(SystemExit) as exc:
            main(["run", str(blinker_file), "--rule", "xyz"])
        assert exc.value.code == 1

    def test_no_command_exits(self) -> None:
        with pytest.raises(SystemExit):
            main([])


class TestRender:
    def test_render_gif(self, blinker_file, tmp_path) -> None:
        out = tmp_path / "out" / "blinker.gif"
        main(["render", str(blinker_file), "--steps", "2", "--margin", "1", "-o", str(out)])
        with Image.open(out) as img:
            assert img.n_frames == 3

    def test_render_png_with_viewport(self, blinker_file, tmp_path) -> None:
        out = tmp_path / "blinker.png"
        main([
            "render", str(blinker_file), "--steps", "0", "--cell-size", "2",
            "--viewport", "-4", "-4", "8", "8", "-o", str(out),
        ])
        with Image.open(out) as img:
            assert img.size == (16, 16)


class TestListings:
    def test_patterns(self, capsys) -> None:
        main(["patterns"])
        out = capsys.readouterr().out
        assert "glider" in out
        assert "gosper_glider_gun" in out

    def test_rules(self, capsys) -> None:
        main(["rules"])
        assert "B36/S23" in capsys.readouterr().out
