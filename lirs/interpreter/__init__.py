from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Iterable

from lirs import SExpression, LispValue
from lirs.builtin.env_builtin import register_constants
from lirs.builtin.macro_builtin import register as register_macros
from lirs.config import get_max_expansion_depth, get_prelude_files
from lirs.evaluation.evaluator import evaluate
from lirs.reader.parser import read_all
from lirs.types.environment import Environment
from lirs.types.errors import LirsDepthExceeded, LirsError, LirsParseError
from lirs.types.macro_table import MacroDefinition, MacroTable
from lirs.types.nil import Nil
from lirs.types.symbol import Symbol

logger = logging.getLogger(__name__)


class Session:
    """
    Holds one top-level Environment and one MacroTable across `eval` calls.

    Sessions share nothing with each other. A session expects one caller at a
    time; it performs no locking of its own.
    """

    def __init__(
        self,
        eval_fn: Callable[[SExpression, Environment, MacroTable], LispValue] | None = None,
        prelude: str | None = 'auto',
        *,
        max_expansion_depth: int | None = None,
    ):
        self.eval_fn = eval_fn or evaluate
        self.env: Environment = Environment()
        register_constants(self.env)

        self.macros: MacroTable = MacroTable(
            max_expansion_depth=max_expansion_depth or get_max_expansion_depth()
        )
        register_macros(self.macros)

        if prelude is None:
            pass  # explicit: no prelude
        elif prelude == 'auto':
            for path in get_prelude_files():
                self.load_file(path)
        else:
            self.eval(prelude)

    def load_file(self, path: Path) -> LispValue:
        logger.debug("Loading %s", path)
        return self.eval(Path(path).read_text(encoding='utf-8'))

    def eval(self, code: str) -> LispValue:
        """Read every form in `code`, evaluate them in order and return the last value.

        Returns nil for input with no forms. A form that fails leaves the
        bindings and macros exactly as they were before that form; earlier
        forms of the same input stay committed.
        """
        try:
            forms = read_all(code)
        except RecursionError:
            raise LirsParseError("Input nested too deeply") from None
        result: LispValue = Nil
        for form in forms:
            result = self.eval_form(form)
        return result

    def eval_form(self, form: SExpression) -> LispValue:
        env_snapshot = self.env.snapshot()
        macro_snapshot = self.macros.snapshot()
        try:
            return self.eval_fn(form, self.env, self.macros)
        except RecursionError:
            self._rollback(env_snapshot, macro_snapshot)
            raise LirsDepthExceeded("Evaluation nested too deeply") from None
        except LirsError:
            self._rollback(env_snapshot, macro_snapshot)
            raise

    def _rollback(self, env_snapshot, macro_snapshot) -> None:
        logger.debug("Rolling back failed form")
        self.env.restore(env_snapshot)
        self.macros.restore(macro_snapshot)

    def register_macro(
        self, name: Symbol | str, formals: Iterable[Symbol | str], body: SExpression
    ) -> MacroDefinition:
        """Install or overwrite a template macro."""
        logger.debug("Registering macro %s", name)
        return self.macros.define_macro(name, formals, body)

    def bindings(self) -> dict[str, LispValue]:
        return {str(k): v for k, v in self.env.vars.items()}
