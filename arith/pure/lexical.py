"""Boolean calculus lexer, abstract syntax tree and parser.

The `pure` directory contains the boolean calculus only- not sufficient for arithmetic (see lang/lexical.py).

Formally, the boolean calculus can be defined as

```
<term> ::= "true"                                    ; constant true
         | "false"                                   ; constant false
         | "if" <term> "then" <term> "else" <term>   ; conditional
```

and its values are just "true" and "false". There are no parentheses: "if" is closed by "then" and "else", so every
token sequence has at most one parse. Evaluation rules (see If.contract and Term.step):

```
if true then t2 else t3 -> t2                        (E-IfTrue)
if false then t2 else t3 -> t3                       (E-IfFalse)
            t1 -> t1'
------------------------------------------------     (E-If)
if t1 then t2 else t3 -> if t1' then t2 else t3
```

Source: Pierce, Types and Programming Languages, chapter 3.
"""

import re
from dataclasses import dataclass

from arith.lang.error import LexError, ParseError
from arith.term import Derivation, Term, Token


@dataclass(frozen=True)
class TrueTerm(Term):
    """Constant true."""

    def contract(self):
        return None

    @property
    def is_value(self):
        return True

    @property
    def nodes(self):
        return ()

    def show(self, sub=str):
        return "true"


@dataclass(frozen=True)
class FalseTerm(Term):
    """Constant false."""

    def contract(self):
        return None

    @property
    def is_value(self):
        return True

    @property
    def nodes(self):
        return ()

    def show(self, sub=str):
        return "false"


@dataclass(frozen=True)
class If(Term):
    """Conditional: if t1 then t2 else t3."""
    CONGRUENCE = "E-If"
    t1: Term
    t2: Term
    t3: Term

    def contract(self):
        if isinstance(self.t1, TrueTerm):
            return Derivation(("E-IfTrue",), self.t2)
        elif isinstance(self.t1, FalseTerm):
            return Derivation(("E-IfFalse",), self.t3)
        return None

    @property
    def is_value(self):
        return False

    @property
    def nodes(self):
        return self.t1, self.t2, self.t3

    def show(self, sub=str):
        return f"if {sub(self.t1)} then {sub(self.t2)} else {sub(self.t3)}"


class Lexer:
    """Converts source text into a list of Tokens. Words are maximal runs of WORD characters and must match a
    keyword in KEYWORDS exactly.
    """
    KEYWORDS = {token.value: token for token in (Token.TRUE, Token.FALSE, Token.IF, Token.THEN, Token.ELSE)}
    WORD = re.compile("[a-z]+")

    @classmethod
    def lex(cls, text):
        """Returns list of Tokens in text. Raises a LexError on the first unrecognized character or word."""
        tokens = []

        pos = 0
        while pos < len(text):
            char = text[pos]
            if char.isspace():
                pos += 1
                continue

            match = cls.WORD.match(text, pos)
            if match is None:
                raise LexError("'{}' contains unrecognized character '{}'", (text, char), start=pos, end=pos + 1)

            word = match.group()
            if word not in cls.KEYWORDS:
                raise LexError("'{}' contains unknown word '{}'", (text, word), start=pos, end=match.end())

            tokens.append(cls.KEYWORDS[word])
            pos = match.end()

        return tokens


class Parser:
    """Recursive descent parser over an explicit cursor. A Parser instance holds the token sequence and the position
    of the next token to consume; parse should be called once per instance.
    """
    NOT_TERMS = (Token.THEN, Token.ELSE)  # tokens that can never start a term

    def __init__(self, tokens):
        self.tokens = tuple(tokens)
        self.pos = 0

    @property
    def expr(self):
        """Token sequence rendered as text, used for error messages."""
        return " ".join(token.value for token in self.tokens)

    def error(self, msg, idx, *args):
        """Returns a ParseError whose diagnosis highlights the token at idx (or the end of input if idx is past it)."""
        start = sum(len(token.value) + 1 for token in self.tokens[:idx])
        if idx < len(self.tokens):
            end = start + len(self.tokens[idx].value)
        else:
            start = end = len(self.expr)
        return ParseError(msg, (self.expr,) + args, start=start, end=end)

    def consume(self):
        """Pops next token. Raises ParseError if none are left."""
        if self.pos >= len(self.tokens):
            raise self.error("'{}' ended while a term was expected", self.pos)

        token = self.tokens[self.pos]
        self.pos += 1
        return token

    def expect(self, tag):
        """Consumes next token and checks that it is tag."""
        token = self.consume()
        if token is not tag:
            raise self.error("'{}' has '{}' where '{}' was expected", self.pos - 1, token.value, tag.value)
        return token

    def term(self):
        """Parses one term starting at the cursor."""
        return self.nonterminal(self.consume())

    def nonterminal(self, token):
        """Builds the term that starts with token, which has just been consumed."""
        if token is Token.TRUE:
            return TrueTerm()
        elif token is Token.FALSE:
            return FalseTerm()
        elif token is Token.IF:
            t1 = self.term()
            self.expect(Token.THEN)
            t2 = self.term()
            self.expect(Token.ELSE)
            t3 = self.term()
            return If(t1, t2, t3)
        elif token in Parser.NOT_TERMS:
            raise self.error("'{}' has '{}' where a term must start", self.pos - 1, token.value)
        raise self.error("'{}' has '{}', which is not part of this calculus", self.pos - 1, token.value)

    def parse(self):
        """Parses exactly one term. Raises ParseError if tokens are left over."""
        term = self.term()
        if self.pos < len(self.tokens):
            raise self.error("'{}' has leftover tokens after a complete term", self.pos)
        return term


def lex(text):
    """Lexes text in the boolean calculus."""
    return Lexer.lex(text)


def parse(tokens):
    """Parses tokens in the boolean calculus."""
    return Parser(tokens).parse()
