"""Lexical analysis and parsing for the arithmetic calculus, a shallow extension of the boolean calculus with natural
numbers in unary form.

All grammar can be loosely defined as follows:

```
<term> ::= <boolean term>        ; everything in pure/lexical.py, with arithmetic subterms allowed
         | "0"                   ; zero, the only numeric literal
         | "succ" <term>         ; successor
         | "pred" <term>         ; predecessor, pred 0 is 0
         | "iszero" <term>       ; zero test
```

Values are "true", "false" and numeric values (<nv> ::= "0" | "succ" <nv>). Numbers other than 0 are written as nested
successors: 2 is "succ succ 0".

Numbers are unary, so long chains of prefix operators are the common case. Parsing, rendering and the numeric value
check all walk such chains in a loop rather than recursing once per operator.
"""

import re
from dataclasses import dataclass

from arith.pure.lexical import FalseTerm, Lexer, Parser, TrueTerm
from arith.term import Derivation, Term, Token


@dataclass(frozen=True)
class Zero(Term):
    """Constant 0."""

    def contract(self):
        return None

    @property
    def is_value(self):
        return True

    @property
    def is_numeric_value(self):
        return True

    @property
    def nodes(self):
        return ()

    def show(self, sub=str):
        return "0"


@dataclass(frozen=True)
class UnaryTerm(Term):
    """Prefix operator KEYWORD applied to t1. show renders a whole chain of prefix operators at once, so sub is only
    applied to the operand at the bottom of the chain.
    """
    KEYWORD = None
    t1: Term

    @property
    def nodes(self):
        return self.t1,

    def show(self, sub=str):
        keywords = []
        term = self
        while isinstance(term, UnaryTerm):
            keywords.append(term.KEYWORD)
            term = term.t1
        return " ".join(keywords + [sub(term)])


@dataclass(frozen=True)
class Succ(UnaryTerm):
    """Successor: succ t1. Only a numeric value when t1 is one."""
    KEYWORD = Token.SUCC.value
    CONGRUENCE = "E-Succ"

    def contract(self):
        return None

    @property
    def is_value(self):
        return self.is_numeric_value

    @property
    def is_numeric_value(self):
        term = self.t1
        while isinstance(term, Succ):
            term = term.t1
        return term.is_numeric_value


@dataclass(frozen=True)
class Pred(UnaryTerm):
    """Predecessor: pred t1."""
    KEYWORD = Token.PRED.value
    CONGRUENCE = "E-Pred"

    def contract(self):
        if isinstance(self.t1, Zero):
            return Derivation(("E-PredZero",), Zero())
        elif isinstance(self.t1, Succ) and self.t1.t1.is_numeric_value:
            return Derivation(("E-PredSucc",), self.t1.t1)
        return None

    @property
    def is_value(self):
        return False


@dataclass(frozen=True)
class IsZero(UnaryTerm):
    """Zero test: iszero t1."""
    KEYWORD = Token.ISZERO.value
    CONGRUENCE = "E-IsZero"

    def contract(self):
        if isinstance(self.t1, Zero):
            return Derivation(("E-IsZeroZero",), TrueTerm())
        elif isinstance(self.t1, Succ) and self.t1.t1.is_numeric_value:
            return Derivation(("E-IsZeroSucc",), FalseTerm())
        return None

    @property
    def is_value(self):
        return False


class ArithLexer(Lexer):
    """Boolean lexer with the arithmetic keywords. Digits are word characters so that "0" is a keyword."""
    KEYWORDS = {
        **Lexer.KEYWORDS,
        **{token.value: token for token in (Token.ZERO, Token.SUCC, Token.PRED, Token.ISZERO)}
    }
    WORD = re.compile("[a-z0-9]+")


class ArithParser(Parser):
    """Boolean parser with the arithmetic constructors. Subterms of boolean constructors may be arithmetic."""
    UNARY = {Token.SUCC: Succ, Token.PRED: Pred, Token.ISZERO: IsZero}

    def nonterminal(self, token):
        operators = []
        while token in ArithParser.UNARY:
            operators.append(ArithParser.UNARY[token])
            token = self.consume()

        term = Zero() if token is Token.ZERO else super().nonterminal(token)
        for operator in reversed(operators):
            term = operator(term)
        return term


def lex(text):
    """Lexes text in the arithmetic calculus."""
    return ArithLexer.lex(text)


def parse(tokens):
    """Parses tokens in the arithmetic calculus."""
    return ArithParser(tokens).parse()
