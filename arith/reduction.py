"""Small-step evaluation of terms in either calculus.

Each Term implements one step of the evaluation relation (Term.step). The relation is a partial function: at most one
rule applies to any term, so there is exactly one reachable normal form and no search is needed. SmallStepReducer
repeats step until no rule applies, then classifies the normal form as a value or reports it as stuck.
"""

from arith.lang.error import StuckTermError


class SmallStepReducer:
    """Implements small-step reduction of a term to its normal form, keeping the derivation of every step."""

    def __init__(self, term):
        self.term = term  # never modified; reduction builds new trees
        self.tree = term
        self.derivations = []

        self.reduced = False

    def reduce(self):
        """Applies step to self.tree until no rule applies. Returns the normal form."""
        derivation = self.tree.step()
        while derivation is not None:
            self.derivations.append(derivation)
            self.tree = derivation.term
            derivation = self.tree.step()

        self.reduced = True
        return self.tree

    def evaluate(self):
        """Reduces self.term and returns its value. Raises StuckTermError if the normal form is not a value."""
        if not self.reduced:
            self.reduce()

        if not self.tree.is_value:
            raise StuckTermError(self.tree, self.term)
        return self.tree

    def trace(self):
        """Returns each step as a (rule names, resulting term) pair."""
        return [(str(derivation), derivation.term) for derivation in self.derivations]

    def __repr__(self):
        return f"{type(self).__name__}({self.term!r})"


def evaluate(term):
    """Evaluates term to a value. Raises StuckTermError if term gets stuck."""
    return SmallStepReducer(term).evaluate()
