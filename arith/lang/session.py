"""Session control for the arith calculi. Runs source text through lexing, parsing and evaluation, either in
command-line mode or file interpretation mode, and renders the intermediate structures that were asked for.
"""

import sys
from dataclasses import dataclass

from termcolor import colored

from arith.lang.error import GenericException
from arith.lang.lexical import ArithLexer, ArithParser
from arith.lang.numerical import numberify
from arith.pure.lexical import Lexer, Parser
from arith.reduction import SmallStepReducer
from arith.term import Term

CALCULI = {
    "bool": (Lexer, Parser),
    "arith": (ArithLexer, ArithParser),
}


@dataclass
class Result:
    """One program run through a Session. value stays None until the program has been evaluated."""
    source: str
    tokens: list
    term: Term
    reducer: SmallStepReducer
    value: Term = None


class Session:
    """Governs an arith session: which calculus is used and what gets rendered."""
    SH_FILE = "<in>"      # command-line interpreter filename
    STDIN = "<stdin>"     # standard input as a single program
    HEADER = "cyan"
    RULE = "yellow"

    def __init__(self, error_handler, path, calculus="arith", cmd_line=False, show_tokens=False, show_term=False,
                 show_trace=False, numbers=False):
        self.error_handler = error_handler

        self.path = path          # used for error messages
        self.cmd_line = cmd_line  # whether or not in command-line mode

        if calculus not in CALCULI:
            raise GenericException("unknown calculus '{}'", calculus, diagnosis=False)
        self.calculus = calculus
        self.lexer, self.parser = CALCULI[calculus]

        self.show_tokens = show_tokens
        self.show_term = show_term
        self.show_trace = show_trace
        self.numbers = numbers    # whether or not numeric values are rendered as decimals

        self.to_exec = {}  # dict of line num: Results to evaluate
        self.results = []  # evaluated Results, oldest first

        if self.cmd_line:
            self.error_handler.fatal = False

        if path != Session.SH_FILE:
            self.add(Session.read(path))

        elif not cmd_line:
            raise GenericException("'<in>' is a reserved filename")

    @staticmethod
    def read(path):
        """Returns the whole contents of path (or of standard input, if path is Session.STDIN) as one program."""
        if path == Session.STDIN:
            return sys.stdin.read()

        try:
            with open(path, "r") as file:
                return file.read()
        except OSError:
            raise GenericException("'{}' could not be opened", path, diagnosis=False)

    @staticmethod
    def preprocess(expr):
        """Collapses all whitespace in expr, newlines included, to single spaces."""
        return " ".join(expr.split())

    @property
    def verbose(self):
        """Whether or not anything other than the value is rendered."""
        return self.show_tokens or self.show_term or self.show_trace

    def add(self, expr, line_num=1):
        """Lexes and parses expr, then queues it for evaluation. Evaluation is delayed until run is called."""
        expr = Session.preprocess(expr)
        self.error_handler.locate(self.path, expr, line_num)  # in case error is raised

        tokens = self.lexer.lex(expr)
        term = self.parser(tokens).parse()
        self.to_exec[line_num] = Result(expr, tokens, term, SmallStepReducer(term))

        self.error_handler.clear()  # error was not raised

    def run(self):
        """Evaluates this session's queued programs in order, rendering each one. Will raise any errors that are
        encountered; a program that raised is not run again.
        """
        for line_num, result in list(self.to_exec.items()):
            self.error_handler.locate(self.path, result.source, line_num)

            try:
                result.reducer.reduce()
                self.render(result)
                result.value = result.reducer.evaluate()
            finally:
                del self.to_exec[line_num]

            self.results.append(result)
            self.section("value", self.show(result.value))

            self.error_handler.clear()

    def show(self, term):
        """Surface syntax of term, with numbers as decimals if self.numbers."""
        return numberify(term) if self.numbers else str(term)

    def section(self, header, body):
        """Prints body, preceded by a header if more than the value is rendered."""
        if self.verbose:
            print(colored(f"-- {header} --", Session.HEADER, attrs=["bold"]))
        print(body)

    def render(self, result):
        """Prints whichever of result's tokens, syntax tree and derivation trace were asked for."""
        if self.show_tokens:
            self.section("tokens", " ".join(token.name for token in result.tokens))
        if self.show_term:
            self.section("term", result.term.display())
        if self.show_trace:
            lines = [f"   {self.show(result.term)}"]
            for rules, term in result.reducer.trace():
                lines.append(f"-> {self.show(term)}  " + colored(rules, Session.RULE))
            self.section("trace", "\n".join(lines))
