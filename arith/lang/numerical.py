"""Natural numbers encoded as numeric values: 0, succ 0, succ succ 0, ... Note that arithmetic is not implemented here
(see the evaluation rules in lang/lexical.py); this module only converts between numeric values and Python ints.
"""

from arith.lang.error import GenericException
from arith.lang.lexical import Succ, UnaryTerm, Zero


def cnumber(num):
    """Returns the numeric value of natural number num."""
    try:
        assert not isinstance(num, (bool, float))
        num = int(num)
        assert num >= 0
    except (AssertionError, TypeError, ValueError):
        raise GenericException("expected natural number, got '{}'", str(num), internal=True)

    term = Zero()
    for _ in range(num):
        term = Succ(term)
    return term


def number(term):
    """Returns the natural number that term denotes. If term isn't a numeric value, returns None."""
    num = 0
    while isinstance(term, Succ):
        term = term.t1
        num += 1
    return num if isinstance(term, Zero) else None


def numberify(term):
    """Surface syntax of term with every numeric value written as a decimal number."""
    keywords = []
    while isinstance(term, UnaryTerm) and number(term) is None:
        keywords.append(term.KEYWORD)
        term = term.t1

    num = number(term)
    keywords.append(str(num) if num is not None else term.show(numberify))
    return " ".join(keywords)
