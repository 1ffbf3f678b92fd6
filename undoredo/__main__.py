"""Undoredo CLI entry point.

Allows running via `python -m undoredo` and provides the console script
defined in `pyproject.toml`. Without arguments it starts a small
interactive demo of the undo/redo engine.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from typing import List, Optional, TextIO

from .constants import UndoRedoConstants
from .file_provider import JsonFileStateProvider
from .manager import UndoRedoManager
from .state_provider import DictStateProvider, StateProvider
from .version import get_version_string

HELP_TEXT = """Commands:
  set1 <text>   Set text1 and commit (text1 triggers commits)
  set2 <text>   Set text2 and commit (observed, never triggers)
  inc           Increment the counter (not observed)
  commit        Commit the current state
  undo / redo   Step through the history
  show          Print the current state
  help          Show this help
  quit          Exit"""


@dataclass
class Options:
    state_file: Optional[str] = None
    max_size: int = UndoRedoConstants.DEFAULT_HISTORY_SIZE
    verbose: bool = False
    show_version: bool = False


def parse_args(args: List[str]) -> Options:
    """Very small arg parsing for the demo flags."""
    options = Options()
    remaining = list(args)
    while remaining:
        arg = remaining.pop(0)
        if arg in ("--version", "-V"):
            options.show_version = True
        elif arg in ("--verbose", "-v"):
            options.verbose = True
        elif arg == "--state-file" and remaining:
            options.state_file = remaining.pop(0)
        elif arg == "--max-size" and remaining:
            try:
                options.max_size = int(remaining.pop(0))
            except ValueError:
                raise SystemExit("--max-size expects an integer")
        else:
            raise SystemExit(f"Unknown argument: {arg}")
    return options


class DemoSession:
    """Two text fields and a counter wired to an undo/redo manager.

    ``text1`` triggers commits. ``text2`` is observed: it is part of every
    snapshot but never records a commit, and undo leaves it as it is. The
    counter is not tracked at all.
    """

    def __init__(self, provider: StateProvider, max_size: int = UndoRedoConstants.DEFAULT_HISTORY_SIZE,
                 persist_history: bool = False):
        self.provider = provider
        self.manager = UndoRedoManager(
            provider, {"text1", "text2"}, max_size=max_size,
            trigger_keys={"text1"}, persist_history=persist_history,
        )
        self.manager.init()

    def execute(self, line: str) -> Optional[str]:
        """Run one command line and return the text to print.

        Returns None when the session should end.
        """
        command, _, argument = line.strip().partition(" ")
        if command in ("quit", "exit"):
            return None
        if command == "set1":
            self.provider.set("text1", argument)
            return self._committed(self.manager.commit())
        if command == "set2":
            self.provider.set("text2", argument)
            return self._committed(self.manager.commit())
        if command == "inc":
            self.provider.set("count", self.provider.get("count", 0) + 1)
            return self.show()
        if command == "commit":
            return self._committed(self.manager.commit())
        if command == "undo":
            return self.show() if self.manager.undo() else "Nothing to undo"
        if command == "redo":
            return self.show() if self.manager.redo() else "Nothing to redo"
        if command == "show":
            return self.show()
        if command in ("help", ""):
            return HELP_TEXT
        return f"Unknown command: {command}"

    def _committed(self, commit) -> str:
        if commit is None:
            return "No change recorded\n" + self.show()
        return self.show()

    def show(self) -> str:
        get = self.provider.get
        return (
            f"text1={get('text1', '')!r} text2={get('text2', '')!r} count={get('count', 0)} "
            f"[undo={'on' if self.manager.can_undo.value else 'off'} "
            f"redo={'on' if self.manager.can_redo.value else 'off'}]"
        )

    def run(self, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None) -> None:
        stdin = stdin or sys.stdin
        stdout = stdout or sys.stdout
        print(HELP_TEXT, file=stdout)
        print(self.show(), file=stdout)
        for line in stdin:
            output = self.execute(line)
            if output is None:
                break
            print(output, file=stdout)


def main(argv: Optional[List[str]] = None) -> None:
    options = parse_args(sys.argv[1:] if argv is None else argv)
    if options.show_version:
        print(get_version_string())
        return
    if options.verbose:
        logging.basicConfig(level=logging.INFO, format="%(name)s: %(message)s")

    if options.state_file:
        provider: StateProvider = JsonFileStateProvider(options.state_file)
        session = DemoSession(provider, options.max_size, persist_history=True)
    else:
        session = DemoSession(DictStateProvider(), options.max_size)
    session.run()


if __name__ == "__main__":  # pragma: no cover
    main()
