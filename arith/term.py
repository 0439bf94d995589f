"""Token vocabulary and abstract syntax shared by the boolean and arithmetic calculi.

Both calculi are untyped: a term either reduces to a value or gets stuck. Terms are immutable, so every reduction step
builds a new tree and the original term is left untouched.

Every congruence rule of both calculi evaluates the first subterm, t1, of its term. Term.step therefore walks down the
t1 spine until a computation rule fires (or nothing applies) and rebuilds the spine on the way back, without recursion,
so arbitrarily deep terms can be stepped.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from enum import Enum


class Token(Enum):
    """Closed token vocabulary. The value of each token is its surface spelling."""
    TRUE = "true"
    FALSE = "false"
    IF = "if"
    THEN = "then"
    ELSE = "else"

    ZERO = "0"
    SUCC = "succ"
    PRED = "pred"
    ISZERO = "iszero"


@dataclass(frozen=True)
class Derivation:
    """Result of a single reduction step. rules lists the names of the evaluation rules used to derive term, outermost
    congruence rule first: ("E-If", "E-IfTrue") means E-IfTrue fired on the condition of an if.
    """
    rules: tuple
    term: "Term"

    def __str__(self):
        result = self.rules[-1]
        for rule in reversed(self.rules[:-1]):
            result = f"{rule}[{result}]"
        return result


class Term(ABC):
    """Superclass of every term in either calculus. Each subclass is one constructor of the term grammar."""
    CONGRUENCE = None  # name of the rule that evaluates t1 in place, if this constructor has one

    @abstractmethod
    def contract(self):
        """Should return a Derivation if a computation rule (one that doesn't just evaluate a subterm) applies to this
        very term, else None.
        """

    @property
    @abstractmethod
    def is_value(self):
        """Whether or not this term matches the value grammar of its calculus."""

    @property
    def is_numeric_value(self):
        """Whether or not this term is a numeric value: 0 or succ of a numeric value."""
        return False

    @property
    @abstractmethod
    def nodes(self):
        """Immediate subterms, in surface order."""

    @abstractmethod
    def show(self, sub=str):
        """Surface syntax of this term. sub renders subterms."""

    def step(self):
        """Single-step evaluation. Returns a Derivation of the next term, or None if no evaluation rule applies to this
        term (that is, if this term is a normal form).
        """
        contexts = []
        term = self
        derivation = term.contract()
        while derivation is None:
            if term.CONGRUENCE is None:
                return None  # stuckness is classified by the reducer
            contexts.append(term)
            term = term.t1
            derivation = term.contract()

        result = derivation.term
        for context in reversed(contexts):
            result = replace(context, t1=result)
        return Derivation(tuple(context.CONGRUENCE for context in contexts) + derivation.rules, result)

    def display(self, indents=0):
        """Recursively displays Term tree with readable format.

        Format:
        <Term>(expr='<expr>', nodes=[
            <Term>(expr='<expr>', nodes=[
                ...
                <Term>(expr='<expr>')  # <-- if nodes is empty
            ])
        ])
        """
        result = f"{'    ' * indents}{type(self).__name__}(expr='{self}'"
        if self.nodes:
            result += ", nodes=["
            for node in self.nodes:
                result += "\n" + node.display(indents + 1) + ","
            result = result[:-1] + f"\n{'    ' * indents}]"
        return result + ")"

    def __str__(self):
        return self.show()
