"""Interactive read loop for Lispy: prompt, read, evaluate, print."""

from __future__ import annotations

import argparse
import atexit
import logging
import sys
from pathlib import Path
from typing import Callable, Optional

from lispy import __version__, config
from lispy.errors import LispyConfigError, LispySyntaxError
from lispy.interpreter import Interpreter

# Readline support for line editing and history
try:
    import readline
    READLINE_AVAILABLE = True
except ImportError:
    READLINE_AVAILABLE = False

logger = logging.getLogger(__name__)


def create_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='lispy',
        description='Lispy - a small Lisp with S-expressions and Q-expressions',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                          # Interactive mode
  %(prog)s -e "+ 1 2"               # Evaluate one input and print the result
  %(prog)s --log-level DEBUG        # Interactive mode with debug logging
        """,
    )
    parser.add_argument('-e', '--eval', metavar='CODE', help='evaluate CODE, print the result and exit')
    parser.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        help='override LISPY_LOG_LEVEL',
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    return parser


def setup_readline(history_file: Optional[Path], history_length: int) -> None:
    """Load history and arrange for it to be saved on exit."""
    if not READLINE_AVAILABLE or history_file is None:
        return
    try:
        readline.read_history_file(history_file)
    except FileNotFoundError:
        pass  # First session, no history yet
    except OSError as exc:
        logger.warning("could not read history file %s: %s", history_file, exc)
    readline.set_history_length(history_length)
    atexit.register(_save_history, history_file)


def _save_history(history_file: Path) -> None:
    try:
        readline.write_history_file(history_file)
    except OSError as exc:
        logger.warning("could not write history file %s: %s", history_file, exc)


def eval_line(interp: Interpreter, line: str) -> str:
    """Evaluate one input line and return the text to show for it."""
    try:
        return interp.eval_to_str(line)
    except LispySyntaxError as exc:
        return f"<stdin>: syntax error: {exc}"
    except RecursionError:
        logger.error("recursion limit reached while evaluating %r", line)
        return "Error: maximum recursion depth exceeded"


def run_repl(
    interp: Interpreter,
    prompt: str,
    input_fn: Callable[[str], str] = input,
    output: Callable[[str], None] = print,
) -> None:
    output(f"Lispy Version {__version__}")
    output("Press Ctrl+C to Exit\n")
    while True:
        try:
            line = input_fn(prompt)
        except (EOFError, KeyboardInterrupt):
            output("")
            return
        if not line.strip():
            continue
        output(eval_line(interp, line))


def main(argv: Optional[list[str]] = None) -> int:
    args = create_arg_parser().parse_args(argv)
    try:
        level = args.log_level or config.get_log_level()
        history_file = config.get_history_file()
        history_length = config.get_history_length()
        recursion_limit = config.get_recursion_limit()
    except LispyConfigError as exc:
        print(f"lispy: {exc}", file=sys.stderr)
        return 2
    logging.basicConfig(level=level, format='%(levelname)s %(name)s: %(message)s')

    interp = Interpreter(recursion_limit=recursion_limit)
    if args.eval is not None:
        print(eval_line(interp, args.eval))
        return 0

    setup_readline(history_file, history_length)
    run_repl(interp, config.get_prompt())
    return 0
