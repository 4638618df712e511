"""
Interactive console for LIRS.

    $ lirs
    lirs> (define mat (perovskite :Ba :Ti :O))
    BaTiO3
    lirs> (substitute mat :Ba :Sr)
    SrTiO3

Lines are buffered until parentheses balance. Commands start with ':'.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections import deque
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, Optional

from lirs.config import get_history_file, get_history_size
from lirs.debug_utils.pprint import color_error, colorize, render
from lirs.interpreter import Session
from lirs.reader.parser import lex, parse
from lirs.types.errors import LirsError, LirsLexError

logger = logging.getLogger(__name__)

PROMPT = "lirs> "
CONTINUATION_PROMPT = "  ... "

HELP = """\
Commands:
  :help               show this message
  :env                list top-level bindings
  :macros             list macro names
  :expand FORM        show the full macro expansion of FORM
  :history [pattern]  show history entries, optionally filtered
  :quit               leave the REPL
Anything else is evaluated as LIRS code."""


@dataclass
class HistoryEntry:
    command: str
    result: Optional[str] = None
    error: Optional[str] = None
    timestamp: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())


class History:
    def __init__(self, max_size: int):
        self.entries: deque[HistoryEntry] = deque(maxlen=max_size)

    def add(self, entry: HistoryEntry) -> None:
        self.entries.append(entry)

    def search(self, pattern: str) -> list[HistoryEntry]:
        return [e for e in self.entries if pattern in e.command]

    def save(self, path: Path) -> None:
        path.write_text(json.dumps([asdict(e) for e in self.entries], indent=2), encoding="utf-8")

    def load(self, path: Path) -> None:
        data = json.loads(path.read_text(encoding="utf-8"))
        self.entries.clear()
        self.entries.extend(HistoryEntry(**item) for item in data)


def needs_more_input(text: str) -> bool:
    """True while `text` has an open '(' or an unterminated string."""
    depth = 0
    try:
        for tok_type, _, _ in lex(text):
            if tok_type == "lparen":
                depth += 1
            elif tok_type == "rparen":
                depth -= 1
    except LirsLexError as ex:
        return ex.offset is not None and ex.offset < len(text) and text[ex.offset] == '"'
    return depth > 0


class Repl:
    def __init__(self, session: Session, history: History, color: bool = True):
        self.session = session
        self.history = history
        self.color = color
        self.running = True

    def _show(self, value) -> str:
        return colorize(value, self.session.macros) if self.color else render(value, readable=True)

    def _error(self, ex: LirsError) -> str:
        message = f"{ex.kind}: {ex}"
        return color_error(message) if self.color else message

    def handle(self, text: str) -> str:
        """Evaluate one complete input or command and return what to print."""
        text = text.strip()
        if not text:
            return ""
        if text.startswith(":"):
            return self._command(text)
        entry = HistoryEntry(command=text)
        try:
            value = self.session.eval(text)
        except LirsError as ex:
            entry.error = f"{ex.kind}: {ex}"
            self.history.add(entry)
            return self._error(ex)
        entry.result = render(value, readable=True)
        self.history.add(entry)
        return self._show(value)

    def _command(self, text: str) -> str:
        cmd, _, arg = text.partition(" ")
        arg = arg.strip()
        if cmd in (":quit", ":q", ":exit"):
            self.running = False
            return ""
        if cmd == ":help":
            return HELP
        if cmd == ":env":
            return "\n".join(
                f"{name} = {render(value, readable=True)}"
                for name, value in sorted(self.session.bindings().items())
            )
        if cmd == ":macros":
            return " ".join(self.session.macros.names())
        if cmd == ":expand":
            try:
                return self._show(self.session.macros.macro_expand_all(parse(arg)))
            except LirsError as ex:
                return self._error(ex)
        if cmd == ":history":
            entries = self.history.search(arg) if arg else list(self.history.entries)
            return "\n".join(
                f"{i}: {e.command}" + (f" => {e.result}" if e.result is not None else f" !! {e.error}")
                for i, e in enumerate(entries, 1)
            )
        return f"Unknown command {cmd}; try :help"

    def run(self, stdin=None, stdout=None) -> None:
        stdin = stdin or sys.stdin
        stdout = stdout or sys.stdout
        interactive = stdin.isatty()
        buffer = ""
        while self.running:
            if interactive:
                stdout.write(CONTINUATION_PROMPT if buffer else PROMPT)
                stdout.flush()
            line = stdin.readline()
            if not line:
                break
            buffer += line
            if needs_more_input(buffer):
                continue
            output = self.handle(buffer)
            buffer = ""
            if output:
                stdout.write(output + "\n")


def main(argv: Iterable[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="lirs", description="LIRS materials-chemistry REPL")
    parser.add_argument("files", nargs="*", type=Path, help="LIRS files to evaluate before the REPL starts")
    parser.add_argument("-e", "--eval", dest="code", help="evaluate CODE, print the result and exit")
    parser.add_argument("--no-prelude", action="store_true", help="skip LIRS_PRELUDE_PATH")
    parser.add_argument("--no-color", action="store_true", help="disable ANSI colours")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    args = parser.parse_args(None if argv is None else list(argv))

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    session = Session(prelude=None if args.no_prelude else "auto")
    history = History(get_history_size())
    history_file = get_history_file()
    if history_file.is_file():
        try:
            history.load(history_file)
        except (OSError, ValueError, TypeError) as ex:
            logger.warning("Ignoring unreadable history file %s: %s", history_file, ex)

    repl = Repl(session, history, color=not args.no_color and sys.stdout.isatty())

    try:
        for path in args.files:
            session.load_file(path)
        if args.code is not None:
            print(render(session.eval(args.code)))
            return 0
    except LirsError as ex:
        print(f"{ex.kind}: {ex}", file=sys.stderr)
        return 1

    try:
        repl.run()
    except KeyboardInterrupt:
        pass
    finally:
        try:
            history.save(history_file)
        except OSError as ex:
            logger.warning("Could not save history to %s: %s", history_file, ex)
    return 0


if __name__ == "__main__":
    sys.exit(main())
