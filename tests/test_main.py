"""Tests for the command-line entry point."""

import pytest
import sys
from PIL import Image

import main


def run_cli(monkeypatch, *args):
    monkeypatch.setattr(sys, 'argv', ['main.py', *args])
    return main.main()


class TestMain:
    """Test main() end to end on tiny renders."""

    def test_renders_default_scene(self, monkeypatch, tmp_path):
        output = tmp_path / 'out.png'
        code = run_cli(monkeypatch, '--width', '4', '--height', '3', '--samples', '1',
                       '--aa', '1', '--threads', '1', '--seed', '1', '--output', str(output))
        assert code == 0
        with Image.open(output) as img:
            assert img.size == (4, 3)
            assert img.mode == 'RGBA'

    def test_frozen_clock(self, monkeypatch, tmp_path):
        # A render that finishes within one clock tick must not divide by zero
        monkeypatch.setattr(main.time, 'time', lambda: 100.0)
        code = run_cli(monkeypatch, '--width', '2', '--height', '2', '--samples', '1',
                       '--aa', '1', '--threads', '1', '--output', str(tmp_path / 'out.png'))
        assert code == 0

    def test_malformed_scene_file(self, monkeypatch, tmp_path, capsys):
        scene = tmp_path / 'bad.yaml'
        scene.write_text("objects:\n  - {type: sphere, center: [0, ~, 0], material: {color: [1, 1, 1]}}\n")
        code = run_cli(monkeypatch, '--scene', str(scene), '--output', str(tmp_path / 'out.png'))
        assert code == 1
        assert 'Error:' in capsys.readouterr().err

    def test_invalid_override(self, monkeypatch, tmp_path):
        code = run_cli(monkeypatch, '--samples', '0', '--output', str(tmp_path / 'out.png'))
        assert code == 1
