from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, TextIO

from cella.builtin.env_builtin import load_builtins
from cella.config import get_log_level, get_prompt, get_recursion_limit
from cella.evaluation.evaluator import evaluate
from cella.printer import to_string
from cella.reader.parser import lex, read_all
from cella.types.environment import Environment
from cella.types.errors import CellaSyntaxError, describe, is_error
from cella.types.value import Value, nil

logger = logging.getLogger(__name__)


class Interpreter:
    """
    Reads and evaluates cella code against one root environment.
    Definitions persist across calls.
    """

    def __init__(self, env: Environment | None = None):
        if env is None:
            env = Environment()
            load_builtins(env)
        self.env: Environment = env

    def eval(self, code: str, filename: str = "<input>") -> Value:
        """Evaluate every form in `code`; return the last value.

        Stops at the first error value and returns it. Syntax errors raise
        CellaSyntaxError.
        """
        result: Value = nil()
        for expr in read_all(code, filename):
            result = evaluate(self.env, expr)
            if is_error(result):
                logger.debug("evaluation of %s stopped: %s", filename, result.message)
                return result
        return result

    def load_file(self, path: str | Path) -> Value:
        path = Path(path)
        logger.debug("loading %s", path)
        return self.eval(path.read_text(), str(path))

    def repl(
        self,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None,
        prompt: Optional[str] = None,
    ) -> None:
        """Read-eval-print loop; errors are reported and the loop continues."""
        stdin = stdin or sys.stdin
        stdout = stdout or sys.stdout
        stderr = stderr or sys.stderr
        prompt = get_prompt() if prompt is None else prompt
        interactive = stdin.isatty()
        pending = ""
        lineno = 1
        logger.debug("repl started")
        while True:
            if interactive:
                stdout.write(prompt if not pending else "." * len(prompt.rstrip()) + " ")
                stdout.flush()
            line = stdin.readline()
            if not line:
                break
            pending += line
            if _open_depth(pending) > 0:
                continue
            source, pending = pending, ""
            first_line, lineno = lineno, lineno + source.count("\n")
            if not source.strip():
                continue
            try:
                for expr in read_all(source, "<stdin>", first_line):
                    result = evaluate(self.env, expr)
                    if is_error(result):
                        stderr.write(describe(result) + "\n")
                        break
                    stdout.write(to_string(result) + "\n")
            except CellaSyntaxError as e:
                stderr.write(f"{e}\n")
            stdout.flush()
        logger.debug("repl finished")


def _open_depth(source: str) -> int:
    """Number of '(' still waiting for a ')'."""
    depth = 0
    for tok_type, _, _ in lex(source):
        if tok_type == "lparen":
            depth += 1
        elif tok_type == "rparen":
            depth -= 1
    return depth


def run_files(interp: Interpreter, paths: list[str], stderr: Optional[TextIO] = None) -> int:
    stderr = stderr or sys.stderr
    status = 0
    for path in paths:
        try:
            result = interp.load_file(path)
        except CellaSyntaxError as e:
            stderr.write(f"{e}\n")
            status = 1
            continue
        except OSError as e:
            stderr.write(f"cella: cannot read {path}: {e.strerror}\n")
            status = 1
            continue
        if is_error(result):
            stderr.write(describe(result) + "\n")
            status = 1
    return status


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="cella", description="A minimal Lisp evaluator")
    parser.add_argument("files", nargs="*", help="source files to run in order")
    parser.add_argument("-i", "--interactive", action="store_true", help="start a REPL after running files")
    parser.add_argument("--log-level", default=get_log_level(), help="logging level (default: %(default)s)")
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    limit = get_recursion_limit()
    if limit is not None:
        logger.debug("setting recursion limit to %d", limit)
        sys.setrecursionlimit(limit)

    interp = Interpreter()
    status = run_files(interp, args.files)
    if not args.files or args.interactive:
        interp.repl()
    return status


if __name__ == "__main__":
    sys.exit(main())
