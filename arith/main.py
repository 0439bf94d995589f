"""Uses the boolean/arithmetic calculi to interpret source files or stdin, or to run in command-line mode. Also uses
error handling context manager. Called from the arith executable script.

Python version must be >=3.7, because error handling requires that dicts are insertion-ordered and terms are
dataclasses.
"""

import argparse
import sys

from arith.lang.error import ErrorHandler
from arith.lang.session import CALCULI, Session
from arith.lang.shell import Shell


def main(argv=None):
    """Runs arith interpreter. Called from arith executable script."""
    assert sys.version_info >= (3, 7), "arith cannot be run with python < 3.7"

    with ErrorHandler() as error_handler:
        parser = argparse.ArgumentParser(description="small-step evaluator for untyped arithmetic expressions")
        parser.add_argument("file", help="file to interpret and run (if empty, reads piped stdin or goes to "
                                         "command-line mode)", nargs="?")
        parser.add_argument("-c", "--calculus", choices=sorted(CALCULI), default="arith",
                            help="bool: true/false/if only; arith: adds 0/succ/pred/iszero (default)")
        parser.add_argument("--tokens", action="store_true", help="print the token sequence")
        parser.add_argument("--ast", action="store_true", help="print the syntax tree")
        parser.add_argument("--trace", action="store_true", help="print every reduction step and its rules")
        parser.add_argument("--numbers", action="store_true", help="print numeric values as decimals")
        args = parser.parse_args(argv)

        options = {
            "calculus": args.calculus,
            "show_tokens": args.tokens,
            "show_term": args.ast,
            "show_trace": args.trace,
            "numbers": args.numbers,
        }

        if args.file is not None:
            Session(error_handler, args.file, cmd_line=False, **options).run()

        elif not sys.stdin.isatty():
            Session(error_handler, Session.STDIN, cmd_line=False, **options).run()

        else:
            Shell(Session(error_handler, Session.SH_FILE, cmd_line=True, **options)).cmdloop()


if __name__ == "__main__":
    main()
