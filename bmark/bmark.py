#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""bmark
Version:  0.1.0
Author:   Sean O'Connell <sean@sdoconnell.net>
License:  MIT
Homepage: https://github.com/sdoconnell/bmark
About:
A terminal-based directory bookmark tool that keeps a file of shell
aliases in sync with a plain-text bookmarks file.

usage: bmark [-h] [-c <file>] for more help: bmark <command> -h ...

Directory bookmarks and shell aliases for nerds.

commands:
  (for more help: bmark <command> -h)
    add                 bookmark the current directory
    config              show or edit configuration
    edit                edit the bookmarks file (uses $EDITOR)
    list (ls)           list bookmarks
    open                open a terminal in a bookmarked directory
    rm                  remove a bookmark
    update              regenerate the shell aliases file
    version             show version info
    watch               regenerate aliases when the bookmarks file changes

optional arguments:
  -h, --help            show this help message and exit
  -c <file>, --config <file>
                        config file


Copyright © 2021 Sean O'Connell

Permission is hereby granted, free of charge, to any person obtaining a copy
of this software and associated documentation files (the "Software"), to deal
in the Software without restriction, including without limitation the rights
to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
copies of the Software, and to permit persons to whom the Software is
furnished to do so, subject to the following conditions:

The above copyright notice and this permission notice shall be included in all
copies or substantial portions of the Software.

THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
SOFTWARE.

"""
import argparse
import configparser
import os
import shlex
import subprocess
import sys
import time

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text
from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer

APP_NAME = "bmark"
APP_VERS = "0.1.0"
APP_COPYRIGHT = "Copyright © 2021 Sean O'Connell."
APP_LICENSE = "Released under MIT license."
SEPARATOR = " - "
STORE_FILE = "bookmarks.txt"
ALIAS_FILE = "aliases.sh"
DEFAULT_DATA_DIR = f"$HOME/.local/share/{APP_NAME}"
DEFAULT_CONFIG_FILE = f"$HOME/.config/{APP_NAME}/config"
DEFAULT_EDITOR = "nvim"
DEFAULT_PICKER = "rofi -dmenu"
DEFAULT_TERMINAL = "kitty --directory %d"
DEFAULT_ALIAS_PREFIX = "_"
# directory names are bytes, keep undecodable ones intact
FILE_ERRORS = "surrogateescape"
# characters the shell won't accept in an alias name
ALIAS_UNSAFE_CHARS = "=/$`'\"\\;&|<>()"
DEFAULT_CONFIG = (
    "[main]\n"
    "# directory holding bookmarks.txt and aliases.sh\n"
    f"#data_dir = {DEFAULT_DATA_DIR}\n"
    "# command used to edit the bookmarks file. The file path\n"
    "# is appended. Default is $EDITOR, falling back to nvim.\n"
    f"#editor_cmd = {DEFAULT_EDITOR}\n"
    "# interactive picker used by 'open'. It is fed the bookmarks\n"
    "# file on stdin and should print the chosen line.\n"
    f"#picker_cmd = {DEFAULT_PICKER}\n"
    "# terminal launched by 'open'. A %d placeholder is replaced\n"
    "# with the bookmarked directory, otherwise the directory is\n"
    "# appended to the command.\n"
    f"#terminal_cmd = {DEFAULT_TERMINAL}\n"
    "# prefix for the generated shell aliases.\n"
    f"#alias_prefix = {DEFAULT_ALIAS_PREFIX}\n"
)


class BmarkError(Exception):
    """Base class for errors reported to the user."""


class ConfigError(BmarkError):
    """The config file or a configured command is unusable."""


class FileOpenError(BmarkError):
    """The bookmarks or aliases file can't be opened.

    Attributes:
        path (str):     the file that failed to open.
        mode (str):     what the file was being opened for.

    """
    def __init__(self, path, mode):
        self.path = path
        self.mode = mode
        super().__init__(f"could not open {path} for {mode}")


class MalformedRecordError(BmarkError):
    """A bookmark line has no separator.

    Attributes:
        line (str):     the offending line.
        lineno (int):   1-based line number, if known.
        path (str):     the bookmarks file, if known.

    """
    def __init__(self, line, lineno=None, path=None):
        self.line = line
        self.lineno = lineno
        self.path = path
        if lineno is not None and path:
            msg = f"malformed bookmark on line {lineno} of {path}: '{line}'"
        else:
            msg = f"malformed bookmark (no '{SEPARATOR}'): '{line}'"
        super().__init__(msg)


class TooManyArgumentsError(BmarkError):
    """`add` was given more than one name."""
    def __init__(self):
        super().__init__("The `add` command takes at most one argument")


class ExternalProcessError(BmarkError):
    """An external program failed to start or reported failure."""


class InvalidNameError(BmarkError):
    """A bookmark name can't be stored."""


class DuplicateNameError(BmarkError):
    """A bookmark with the same name already exists."""
    def __init__(self, name):
        self.name = name
        super().__init__(f"a bookmark named '{name}' already exists")


class UnusableAliasError(BmarkError):
    """A stored bookmark name can't be written as a shell alias.

    Attributes:
        name (str):     the bookmark name.
        lineno (int):   1-based line number in the bookmarks file.
        path (str):     the bookmarks file.

    """
    def __init__(self, name, lineno, path):
        self.name = name
        self.lineno = lineno
        self.path = path
        super().__init__(
            f"bookmark '{name}' on line {lineno} of {path} "
            "can't be used as an alias name")


class BookmarkNotFoundError(BmarkError):
    """No bookmark matches a given name."""
    def __init__(self, name):
        self.name = name
        super().__init__(f"bookmark '{name}' not found")


def encode_record(name, path):
    """Format a bookmark as a line for the bookmarks file.

    Quotes inside `path` are not escaped.

    Args:
        name (str):     the bookmark name.
        path (str):     the bookmarked directory.

    Returns:
        line (str):     `<name> - "<path>"`, without a newline.

    """
    return f'{name}{SEPARATOR}"{path}"'


def decode_record(line):
    """Split a bookmarks file line on the first separator.

    Args:
        line (str):     a line from the bookmarks file.

    Returns:
        name (str):     everything before the separator.
        value (str):    everything after it, verbatim (quotes included).

    """
    line = line.rstrip("\r\n")
    name, sep, value = line.partition(SEPARATOR)
    if not sep:
        raise MalformedRecordError(line)
    return name, value


def unquote(value):
    """Strip one pair of surrounding double quotes from a stored path."""
    if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
        return value[1:-1]
    return value


def alias_safe(name):
    """Returns True if `name` can follow the prefix in an alias line."""
    if not name or len(name.split()) != 1 or name != name.strip():
        return False
    return not any(char in ALIAS_UNSAFE_CHARS for char in name)


def echo(text):
    """Print a line, writing undecodable filename bytes back out as they
    were read.

    Args:
        text (str):     the line to print (without newline).

    """
    buffer = getattr(sys.stdout, "buffer", None)
    if buffer is None:
        print(text)
        return
    sys.stdout.flush()
    buffer.write(os.fsencode(f"{text}\n"))
    buffer.flush()


def error_exit(errormsg):
    """Print an error message and exit with a status of 1

    Args:
        errormsg (str): the error message to display.

    """
    echo(f'ERROR: {errormsg}.')
    sys.exit(1)


def error_pass(errormsg):
    """Print an error message but don't exit.

    Args:
        errormsg (str): the error message to display.

    """
    echo(f'ERROR: {errormsg}.')


class Config():
    """Settings for a Bookmarks() object. Built once by the command
    line front end and passed in, so nothing below reads the
    environment.

    Attributes:
        store_path (str):   the bookmarks file.
        alias_path (str):   the generated aliases file.
        editor_cmd (str):   editor command (file path is appended).
        picker_cmd (str):   interactive line picker command.
        terminal_cmd (str): terminal command (%d is the directory).
        alias_prefix (str): prefix for generated alias names.

    """
    def __init__(
            self,
            store_path,
            alias_path,
            editor_cmd=DEFAULT_EDITOR,
            picker_cmd=DEFAULT_PICKER,
            terminal_cmd=DEFAULT_TERMINAL,
            alias_prefix=DEFAULT_ALIAS_PREFIX):
        """Initializes a Config() object."""
        self.store_path = store_path
        self.alias_path = alias_path
        self.editor_cmd = editor_cmd
        self.picker_cmd = picker_cmd
        self.terminal_cmd = terminal_cmd
        self.alias_prefix = alias_prefix

    @classmethod
    def from_data_dir(cls, data_dir, **kwargs):
        """Build a Config() with both files placed in `data_dir`."""
        return cls(
            os.path.join(data_dir, STORE_FILE),
            os.path.join(data_dir, ALIAS_FILE),
            **kwargs)

    def items(self):
        """Returns the settings as (key, value) pairs."""
        return [
            ("store_path", self.store_path),
            ("alias_path", self.alias_path),
            ("editor_cmd", self.editor_cmd),
            ("picker_cmd", self.picker_cmd),
            ("terminal_cmd", self.terminal_cmd),
            ("alias_prefix", self.alias_prefix)
        ]


def _expand_path(path):
    return os.path.expandvars(os.path.expanduser(path))


def load_config(config_file, data_dir, editor=None):
    """Read the config file (creating a default one if it doesn't
    exist) and return a Config().

    Args:
        config_file (str):  application config file.
        data_dir (str):     data directory used if the config file
    doesn't set one.
        editor (str):       editor used if the config file doesn't
    set one (normally $EDITOR).

    Returns:
        config (obj):   a Config() object.

    """
    if not os.path.exists(config_file):
        try:
            config_dir = os.path.dirname(config_file)
            if config_dir:
                os.makedirs(config_dir, exist_ok=True)
            with open(config_file, "w",
                      encoding="utf-8") as out_file:
                out_file.write(DEFAULT_CONFIG)
        except OSError as exc:
            raise ConfigError(
                f"config file {config_file} doesn't exist "
                "and can't be created") from exc

    parser = configparser.ConfigParser()
    try:
        parser.read(config_file, encoding="utf-8")
    except (configparser.Error, UnicodeDecodeError) as exc:
        raise ConfigError(
            f"error reading config file {config_file}") from exc

    settings = {
        "editor_cmd": editor or DEFAULT_EDITOR,
        "picker_cmd": DEFAULT_PICKER,
        "terminal_cmd": DEFAULT_TERMINAL,
        "alias_prefix": DEFAULT_ALIAS_PREFIX
    }
    if "main" in parser:
        main_section = parser["main"]
        if main_section.get("data_dir", raw=True):
            data_dir = _expand_path(main_section.get("data_dir", raw=True))
        for key in settings:
            # command strings may contain %d, so never interpolate
            value = main_section.get(key, raw=True)
            if value:
                settings[key] = value

    return Config.from_data_dir(data_dir, **settings)


class ProcessRunner():
    """Launches external programs (editor, picker, terminal)."""

    @staticmethod
    def run_foreground(argv):
        """Run a program attached to the terminal and wait for it.

        Args:
            argv (list):    the command and its arguments.

        Returns:
            status (int):   the exit status.

        """
        try:
            proc = subprocess.run(argv, check=False)
        except OSError as exc:
            raise ExternalProcessError(
                f"failure running '{argv[0]}': {exc.strerror}") from exc
        return proc.returncode

    @staticmethod
    def run_piped(argv, stdin):
        """Run a program with `stdin` as its input and capture its output.

        Args:
            argv (list):    the command and its arguments.
            stdin (str):    text to feed the program.

        Returns:
            stdout (str):   what the program printed.
            status (int):   the exit status.

        """
        try:
            proc = subprocess.run(
                argv,
                input=os.fsencode(stdin),
                stdout=subprocess.PIPE,
                check=False)
        except OSError as exc:
            raise ExternalProcessError(
                f"failure running '{argv[0]}': {exc.strerror}") from exc
        return os.fsdecode(proc.stdout), proc.returncode

    @staticmethod
    def run_detached(argv, cwd=None):
        """Start a program in its own session and don't wait for it."""
        try:
            subprocess.Popen(
                argv,
                cwd=cwd,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=True)
        except OSError as exc:
            raise ExternalProcessError(
                f"failure running '{argv[0]}' in {cwd}: "
                f"{exc.strerror}") from exc


class Bookmarks():
    """Performs bookmark operations.

    Attributes:
        config (obj):       a Config() object.
        runner (obj):       launches external programs.
        store_file (str):   the bookmarks file.
        alias_file (str):   the generated aliases file.

    """
    def __init__(self, config, runner=None):
        """Initializes a Bookmarks() object."""
        self.config = config
        self.runner = runner or ProcessRunner()
        self.store_file = config.store_path
        self.alias_file = config.alias_path

    @staticmethod
    def _check_name(name):
        """Reject names that would corrupt the bookmarks file or the
        aliases file.

        Args:
            name (str):     the proposed bookmark name.

        """
        if SEPARATOR in name:
            raise InvalidNameError(
                f"bookmark name '{name}' contains '{SEPARATOR}'")
        if "\n" in name or "\r" in name:
            raise InvalidNameError(
                f"bookmark name {name!r} contains a line break")
        if not alias_safe(name):
            raise InvalidNameError(
                f"bookmark name '{name}' can't be used as an alias name "
                "(no whitespace or any of "
                f"{' '.join(ALIAS_UNSAFE_CHARS)}), please give another name")

    @staticmethod
    def _command(cmd, key):
        """Split a configured command string into an argument list.

        Args:
            cmd (str):  the command string.
            key (str):  the config key it came from.

        Returns:
            argv (list):    the command and its arguments.

        """
        try:
            argv = shlex.split(cmd or "")
        except ValueError as exc:
            raise ConfigError(f"can't parse {key} '{cmd}'") from exc
        if not argv:
            raise ConfigError(f"{key} is not set")
        return argv

    def _names(self):
        """Returns the set of names in the bookmarks file."""
        names = set()
        if not os.path.exists(self.store_file):
            return names
        for line in self.list():
            try:
                name, _ = decode_record(line)
            except MalformedRecordError:
                continue
            names.add(name)
        return names

    def _verify_data_dir(self):
        """Create the directory holding the bookmarks file if it doesn't
        exist.
        """
        data_dir = os.path.dirname(self.store_file)
        if data_dir and not os.path.isdir(data_dir):
            try:
                os.makedirs(data_dir, exist_ok=True)
            except OSError as exc:
                raise BmarkError(
                    f"{data_dir} doesn't exist "
                    "and can't be created") from exc

    def _write_store(self, lines):
        """Overwrite the bookmarks file.

        Args:
            lines (list):   lines to write, without newlines.

        """
        try:
            with open(self.store_file, "w",
                      encoding="utf-8", errors=FILE_ERRORS) as out_file:
                for line in lines:
                    out_file.write(f"{line}\n")
        except OSError as exc:
            raise FileOpenError(self.store_file, "writing") from exc

    def add(self, name=None, cwd=None):
        """Bookmark a directory and regenerate the aliases file.

        Args:
            name (str):     the bookmark name (default: the last
        component of `cwd`).
            cwd (str):      the directory to bookmark (default: the
        current working directory).

        Returns:
            skipped (list): MalformedRecordError() for each line the
        alias regeneration skipped.

        """
        cwd = cwd or os.getcwd()
        if not name:
            name = os.path.basename(os.path.normpath(cwd))
            if not name:
                raise InvalidNameError(
                    f"can't name a bookmark after '{cwd}', "
                    "please give a name")
        self._check_name(name)
        if name in self._names():
            raise DuplicateNameError(name)
        self._verify_data_dir()
        try:
            with open(self.store_file, "a",
                      encoding="utf-8", errors=FILE_ERRORS) as out_file:
                out_file.write(f"{encode_record(name, cwd)}\n")
        except OSError as exc:
            raise FileOpenError(self.store_file, "appending") from exc
        return self.update()

    def edit(self):
        """Edit the bookmarks file (using the configured editor), then
        regenerate the aliases file whatever the editor's exit status.

        Returns:
            skipped (list): lines the alias regeneration skipped.

        """
        self._verify_data_dir()
        argv = self._command(self.config.editor_cmd, "editor_cmd")
        self.runner.run_foreground(argv + [self.store_file])
        return self.update()

    def edit_config(self, config_file):
        """Edit the config file using the configured editor."""
        argv = self._command(self.config.editor_cmd, "editor_cmd")
        self.runner.run_foreground(argv + [config_file])

    def list(self):
        """Yields the lines of the bookmarks file, oldest first.

        Yields:
            line (str):     a raw line, without its newline.

        """
        try:
            in_file = open(self.store_file, "r", encoding="utf-8",
                           errors=FILE_ERRORS)
        except OSError as exc:
            raise FileOpenError(self.store_file, "reading") from exc
        with in_file:
            for line in in_file:
                yield line.rstrip("\r\n")

    def open(self):
        """Pick a bookmark interactively and open a terminal there.

        Returns:
            name (str):     the chosen bookmark.
            path (str):     the directory the terminal was opened in.

        """
        content = "".join(f"{line}\n" for line in self.list())
        picker = self._command(self.config.picker_cmd, "picker_cmd")
        choice, status = self.runner.run_piped(picker, content)
        if status != 0:
            raise ExternalProcessError(
                f"picker '{picker[0]}' exited with status {status}")
        choice = choice.splitlines()[0] if choice.strip() else ""
        if not choice:
            raise ExternalProcessError("no bookmark chosen")
        name, value = decode_record(choice)
        path = unquote(value)
        # paths are stored unchecked, the directory may be gone
        if not os.path.isdir(path):
            raise BmarkError(
                f"bookmark '{name}' points to {path}, "
                "which is not a directory")

        terminal = self._command(self.config.terminal_cmd, "terminal_cmd")
        if "%d" in terminal:
            terminal = [path if item == "%d"
                        else item for item in terminal]
        else:
            terminal.append(path)
        self.runner.run_detached(terminal, cwd=path)
        return name, path

    def remove(self, name):
        """Remove every bookmark named exactly `name` (case-sensitive),
        then regenerate the aliases file. Other lines, including
        malformed ones, are kept as they are.

        Args:
            name (str):     the bookmark to remove.

        Returns:
            skipped (list): lines the alias regeneration skipped.

        """
        kept = []
        removed = 0
        for line in self.list():
            try:
                this_name, _ = decode_record(line)
            except MalformedRecordError:
                this_name = None
            if this_name == name:
                removed += 1
            else:
                kept.append(line)
        if not removed:
            raise BookmarkNotFoundError(name)
        self._write_store(kept)
        return self.update()

    def update(self):
        """Rewrite the aliases file from the bookmarks file. Blank lines
        are ignored. Malformed lines and names that can't be alias names
        are skipped.

        Returns:
            skipped (list): a MalformedRecordError() or
        UnusableAliasError() for each skipped line, carrying its line
        number.

        """
        aliases = []
        skipped = []
        for lineno, line in enumerate(self.list(), start=1):
            if not line.strip():
                continue
            try:
                name, value = decode_record(line)
            except MalformedRecordError:
                skipped.append(MalformedRecordError(
                    line, lineno=lineno, path=self.store_file))
                continue
            if not alias_safe(name):
                skipped.append(UnusableAliasError(
                    name, lineno, self.store_file))
                continue
            aliases.append(
                f"alias {self.config.alias_prefix}{name}={value}\n")
        try:
            with open(self.alias_file, "w",
                      encoding="utf-8", errors=FILE_ERRORS) as out_file:
                out_file.writelines(aliases)
        except OSError as exc:
            raise FileOpenError(self.alias_file, "writing") from exc
        return skipped

    def watch(self, interval=1):
        """Regenerate the aliases file whenever the bookmarks file
        changes, until interrupted.
        """
        self._verify_data_dir()
        observer = Observer()
        handler = AliasUpdateHandler(self)
        observer.schedule(
                handler,
                os.path.dirname(os.path.abspath(self.store_file)),
                recursive=False)
        observer.start()
        try:
            while observer.is_alive():
                time.sleep(interval)
        finally:
            observer.stop()
            observer.join()


class AliasUpdateHandler(FileSystemEventHandler):
    """Handler to regenerate aliases when the bookmarks file changes.

    Attributes:
        bookmarks (obj):    the Bookmarks() object to update.

    """
    def __init__(self, bookmarks):
        """Initializes an AliasUpdateHandler() object."""
        self.bookmarks = bookmarks
        self.store_file = os.path.abspath(bookmarks.store_file)

    def on_any_event(self, event):
        """Regenerate aliases for changes to the bookmarks file.
        Args:
            event (obj):    file system event.
        """
        if event.is_directory or event.event_type not in [
                'created', 'modified', 'moved']:
            return
        paths = [event.src_path, getattr(event, 'dest_path', '')]
        paths = [os.path.abspath(os.fsdecode(p)) for p in paths if p]
        if self.store_file not in paths:
            return
        try:
            skipped = self.bookmarks.update()
        except BmarkError as exc:
            error_pass(str(exc))
        else:
            for err in skipped:
                error_pass(f"{err} - SKIPPING")


class UsageParser(argparse.ArgumentParser):
    """ArgumentParser that prints usage to stdout and exits with a
    status of 1 on bad input.
    """
    def error(self, message):
        self.print_usage(sys.stdout)
        print(f"{self.prog}: error: {message}")
        sys.exit(1)


def print_lines(lines, pager=False):
    """Print lines as they are, optionally through a pager.

    Args:
        lines (iterable):   the lines to print.
        pager (bool):       page output.

    """
    if pager:
        console = Console(highlight=False)
        with console.pager():
            for line in lines:
                # display only, the pager can't take raw bytes
                printable = os.fsencode(line).decode("utf-8", "replace")
                console.print(Text(printable), soft_wrap=True)
    else:
        for line in lines:
            echo(line)


def show_config(config, config_file):
    """Print the effective configuration.

    Args:
        config (obj):       a Config() object.
        config_file (str):  the file it was read from.

    """
    console = Console()
    config_table = Table(
        title=f"Configuration - {config_file}",
        title_justify="left",
        box=box.SIMPLE,
        show_header=False,
        show_lines=False,
        pad_edge=False,
        collapse_padding=False,
        min_width=40,
        padding=(0, 1, 0, 0))
    config_table.add_column("label", style="bright_black", no_wrap=True)
    config_table.add_column("data")
    for key, value in config.items():
        config_table.add_row(f"{key}:", Text(value))
    layout = Table.grid()
    layout.add_column("single")
    layout.add_row("")
    layout.add_row(config_table)
    console.print(layout)


def parse_args(argv=None):
    """Parse command line arguments.

    Args:
        argv (list):    arguments to parse (default: sys.argv[1:]).

    Returns:
        parser (obj):   the argument parser.
        args (obj):     the parsed arguments.
        extra (list):   arguments left over after parsing.

    """
    parser = UsageParser(
        prog=APP_NAME,
        description='Directory bookmarks and shell aliases for nerds.')
    parser._positionals.title = 'commands'
    parser.set_defaults(command=None)
    subparsers = parser.add_subparsers(
        metavar=f'(for more help: {APP_NAME} <command> -h)')
    add = subparsers.add_parser(
        'add',
        help='bookmark the current directory')
    add.add_argument(
        'name',
        nargs='?',
        help='bookmark name (default: the directory name)')
    add.set_defaults(command='add')
    config = subparsers.add_parser(
        'config',
        help='show or edit configuration')
    config.add_argument(
        'action',
        nargs='?',
        default='show',
        choices=['show', 'edit', 'source'],
        help='show (default), edit, or print a line to source the aliases')
    config.set_defaults(command='config')
    edit = subparsers.add_parser(
        'edit',
        help='edit the bookmarks file (uses $EDITOR)')
    edit.set_defaults(command='edit')
    listcmd = subparsers.add_parser(
        'list',
        aliases=['ls'],
        help='list bookmarks')
    listcmd.add_argument(
        '-p',
        '--page',
        dest='page',
        action='store_true',
        help="page output")
    listcmd.set_defaults(command='list')
    opencmd = subparsers.add_parser(
        'open',
        help='open a terminal in a bookmarked directory')
    opencmd.set_defaults(command='open')
    remove = subparsers.add_parser(
        'rm',
        help='remove a bookmark')
    remove.add_argument(
        'name',
        help='bookmark name')
    remove.set_defaults(command='rm')
    update = subparsers.add_parser(
        'update',
        help='regenerate the shell aliases file')
    update.set_defaults(command='update')
    version = subparsers.add_parser(
        'version',
        help='show version info')
    version.set_defaults(command='version')
    watch = subparsers.add_parser(
        'watch',
        help='regenerate aliases when the bookmarks file changes')
    watch.set_defaults(command='watch')
    parser.add_argument(
        '-c',
        '--config',
        dest='config',
        metavar='<file>',
        help='config file')
    args, extra = parser.parse_known_args(argv)
    return parser, args, extra


def _main(argv, runner):
    """Parses arguments, creates Bookmarks() object, calls requested
    method and parameters.
    """
    if os.environ.get("XDG_CONFIG_HOME"):
        config_file = os.path.join(
            _expand_path(os.environ["XDG_CONFIG_HOME"]), APP_NAME, "config")
    else:
        config_file = _expand_path(DEFAULT_CONFIG_FILE)

    if os.environ.get("XDG_DATA_HOME"):
        data_dir = os.path.join(
            _expand_path(os.environ["XDG_DATA_HOME"]), APP_NAME)
    else:
        data_dir = _expand_path(DEFAULT_DATA_DIR)

    parser, args, extra = parse_args(argv)

    if args.config:
        config_file = _expand_path(args.config)

    if not args.command:
        parser.print_help(sys.stdout)
        sys.exit(1)
    elif args.command == "version":
        print(f"{APP_NAME} {APP_VERS}")
        print(APP_COPYRIGHT)
        print(APP_LICENSE)
        return

    skipped = []
    try:
        if extra:
            if args.command == "add" and not extra[0].startswith("-"):
                raise TooManyArgumentsError()
            parser.error(f"unrecognized arguments: {' '.join(extra)}")

        config = load_config(
            config_file,
            data_dir,
            editor=os.environ.get("EDITOR"))
        bookmarks = Bookmarks(config, runner=runner)

        if args.command == "add":
            skipped = bookmarks.add(args.name)
        elif args.command == "list":
            print_lines(bookmarks.list(), pager=args.page)
        elif args.command == "edit":
            skipped = bookmarks.edit()
        elif args.command == "open":
            bookmarks.open()
        elif args.command == "rm":
            skipped = bookmarks.remove(args.name)
        elif args.command == "update":
            skipped = bookmarks.update()
        elif args.command == "config":
            if args.action == "edit":
                bookmarks.edit_config(config_file)
            elif args.action == "source":
                echo(f'source "{config.alias_path}"')
            else:
                show_config(config, config_file)
        elif args.command == "watch":
            try:
                bookmarks.watch()
            except KeyboardInterrupt:
                print("\nStopped watching.")
        else:
            sys.exit(1)
    except BmarkError as exc:
        error_exit(str(exc))

    if skipped:
        for err in skipped:
            error_pass(f"{err} - SKIPPING")
        sys.exit(1)


def main(argv=None, runner=None):
    """Entry point, also used by the console script."""
    try:
        _main(argv, runner)
    except KeyboardInterrupt:
        print("\nInterrupted.")
        sys.exit(1)


# entry point
if __name__ == "__main__":
    main()
