"""Tests for the ``python -m delve`` entry point."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import delve.utils.logging as delve_logging
from delve.__main__ import EXIT_INSUFFICIENT_SPACE, main


def _quiet(monkeypatch):
    monkeypatch.setattr(delve_logging, "setup_logging", lambda level="INFO", stream=None: None)


def test_generate_prints_map(monkeypatch, capsys):
    _quiet(monkeypatch)
    code = main(["generate", "--seed", "cli", "--width", "40", "--height", "20", "--rooms", "3"])
    out = capsys.readouterr().out
    assert code == 0
    lines = out.strip().split("\n")
    assert lines[-1] == "seed: cli"
    assert len(lines) == 21
    assert all(len(line) == 40 for line in lines[:-1])


def test_generate_is_reproducible(monkeypatch, capsys):
    _quiet(monkeypatch)
    main(["generate", "--seed", "again", "--width", "40", "--height", "20", "--rooms", "3"])
    first = capsys.readouterr().out
    main(["generate", "--seed", "again", "--width", "40", "--height", "20", "--rooms", "3"])
    assert capsys.readouterr().out == first


def test_insufficient_space_exit_code(monkeypatch, capsys):
    _quiet(monkeypatch)
    code = main(["generate", "--seed", "tight", "--width", "8", "--height", "8", "--rooms", "9"])
    assert code == EXIT_INSUFFICIENT_SPACE
    assert capsys.readouterr().out == ""


def test_invalid_config_exit_code(monkeypatch):
    _quiet(monkeypatch)
    assert main(["generate", "--rooms", "1"]) == 1
