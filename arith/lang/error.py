"""Error handling for the arith calculi. Every error a program can cause is a GenericException: LexError and ParseError
while reading it, StuckTermError while evaluating it. Anything else reaching ErrorHandler is an internal issue.
"""

import sys

from termcolor import colored

ERROR = "red"


class GenericException(Exception):
    """Templates an error message so that it can be used to throw an arith error. msg is a format string whose fields
    are filled in with exprs; exprs[0] is the offending expr and expr[start:end] is the part to highlight.
    """

    def __init__(self, msg, exprs=None, start=0, end=-1, diagnosis=True, internal=False):
        if exprs is None:
            exprs = ""
        if isinstance(exprs, str):
            exprs = [exprs]

        self.msg = msg.format(*(colored(expr, attrs=["bold"]) for expr in exprs))  # color expr snippets
        self.expr = exprs[0]
        self.start = start
        self.end = end if end != -1 else len(self.expr)

        self.diagnosis = diagnosis
        self.internal = internal

        super().__init__(self.msg)

    def diagnose(self):
        """Returns self.expr with the offending span highlighted, and a caret line underneath."""
        end = max(self.end, 1)
        highlighted = self.expr[:self.start] + colored(self.expr[self.start:end], ERROR, attrs=["bold"])
        underline = " " * self.start + colored("^" + "~" * (end - self.start - 1), ERROR, attrs=["bold"])
        return f"  {highlighted}{self.expr[end:]}\n  {underline}"

    def report(self):
        """Lines printed under the error message."""
        if self.expr and self.diagnosis:
            return [self.diagnose()]
        return []


class LexError(GenericException):
    """Source text contains an unrecognized character or word."""


class ParseError(GenericException):
    """Token sequence does not form exactly one term."""


class StuckTermError(GenericException):
    """Normal form that is not a value: no evaluation rule applies, yet the term is not a value. original is the term
    whose evaluation got stuck.
    """

    def __init__(self, term, original=None):
        self.term = term
        self.original = original if original is not None else term

        super().__init__("'{}' is stuck: no evaluation rule applies and it is not a value", str(term))

    def report(self):
        if self.original is self.term:
            return []
        return [f"  evaluating: {self.original}", f"  stuck at:   {self.term}"]


class ErrorHandler:
    """Context manager that reports arith errors instead of letting them propagate. A fatal handler exits after
    reporting; a non-fatal one (command-line mode) suppresses the error so the next program starts clean.
    """

    def __init__(self, fatal=True):
        self.fatal = fatal
        self.location = None  # (path, source, line_num) of the program being processed

    def locate(self, path, source, line_num):
        """Records which program is being processed. Should be called prior to Session add/run."""
        self.location = (path, source, line_num)

    def clear(self):
        """Forgets the current program. Should be called after a successful Session add/run."""
        self.location = None

    def throw(self, error):
        """Prints error, with the location of the program that caused it, then exits if self.fatal."""
        lines = []
        if self.location is not None:
            path, source, line_num = self.location
            lines.append(f"{path}:{line_num}: {source}")

        label = "[internal] error: " if error.internal else "error: "
        lines.append(colored(label, ERROR, attrs=["bold"]) + error.msg)
        if not error.internal:
            lines.extend(error.report())
        print("\n".join(lines))

        self.clear()
        if self.fatal:
            sys.exit(1)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None or issubclass(exc_type, SystemExit):
            return False

        if issubclass(exc_type, GenericException):
            self.throw(exc_val)
        elif exc_type is KeyboardInterrupt:
            self.throw(GenericException("keyboard interrupt"))
        elif exc_type is RecursionError:
            self.throw(GenericException("term is nested too deeply: maximum recursion depth exceeded"))
        else:
            self.throw(GenericException(f"unknown error: '{exc_type.__name__}: {exc_val}'", internal=True))
            return False  # internal errors propagate when not fatal
        return True
