import os

import pytest

from bmark.bmark import Bookmarks, Config


class FakeRunner():
    """Records external program launches instead of running them."""

    def __init__(self, picker_output="", picker_status=0, editor_status=0,
                 on_foreground=None):
        self.picker_output = picker_output
        self.picker_status = picker_status
        self.editor_status = editor_status
        self.on_foreground = on_foreground
        self.foreground = []
        self.piped = []
        self.detached = []

    def run_foreground(self, argv):
        self.foreground.append(argv)
        if self.on_foreground:
            self.on_foreground(argv)
        return self.editor_status

    def run_piped(self, argv, stdin):
        self.piped.append((argv, stdin))
        return self.picker_output, self.picker_status

    def run_detached(self, argv, cwd=None):
        self.detached.append((argv, cwd))


@pytest.fixture
def runner():
    return FakeRunner()


@pytest.fixture
def data_dir(tmp_path):
    """Data directory for a bookmarks/aliases pair (not created)."""
    return str(tmp_path / "data")


@pytest.fixture
def config(data_dir):
    return Config.from_data_dir(
        data_dir,
        editor_cmd="nvim",
        picker_cmd="rofi -dmenu",
        terminal_cmd="kitty --directory %d")


@pytest.fixture
def bookmarks(config, runner):
    return Bookmarks(config, runner=runner)


@pytest.fixture
def write_store(config):
    """Write raw content to the bookmarks file."""
    def _write(content):
        os.makedirs(os.path.dirname(config.store_path), exist_ok=True)
        with open(config.store_path, "w", encoding="utf-8") as out_file:
            out_file.write(content)
    return _write


@pytest.fixture
def read_file():
    def _read(path):
        with open(path, "r", encoding="utf-8") as in_file:
            return in_file.read()
    return _read


@pytest.fixture
def cli_env(tmp_path, monkeypatch):
    """Point the command line front end at temporary XDG directories.

    Returns the data directory bmark will use.
    """
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "share"))
    monkeypatch.delenv("EDITOR", raising=False)
    return str(tmp_path / "share" / "bmark")


@pytest.fixture
def make_runner():
    """Factory for FakeRunner() objects with canned results."""
    return FakeRunner
