import logging
import re
from fractions import Fraction
from functools import lru_cache
from typing import TYPE_CHECKING, Tuple, Union

from factorium.core.errors import InvalidFactorError, UnitFormatError
from factorium.core.factor import Factor, NumberFactor, divide, multiply

if TYPE_CHECKING:
    from factorium.units.registry import UnitsRegistry

logger = logging.getLogger(__name__)

# --- Plan node types ------------------------------------------------
# ("name", <str>, None)
# ("number", <Fraction>, None)
# ("pow", <plan>, <int>)
# ("mul", <plan>, <plan>)
# ("div", <plan>, <plan>)
Plan = Tuple[str, Union[str, Fraction, "Plan"], Union[int, "Plan", None]]

_NUMBER_RE = re.compile(r"(?:\d+(?:\.\d+)?|\.\d+)(?:[eE][+-]?\d+)?")
_DISALLOWED = frozenset('~!@#$%&|=,:;?<>\'"`\\[]{}')


# ---------------- Parser that builds a PLAN (no registry lookups!) ----------------
class _UnitExprParser:
    """
    Grammar:
      expr   := term (('*' | '·' | '/') term)*
      term   := factor [('^' | '**') signed_int]
      factor := NUMBER | NAME | '(' expr ')'
      NUMBER := positive decimal literal, optional exponent ('1000', '0.5', '1e-3')
      NAME   := (letter | '_') (letter | digit | '_')*
      signed_int := ['+'|'-']? [0-9]+

    '*' and '/' share precedence and associate to the left, so 'a/b*c' is a*b^-1*c.
    """
    def __init__(self, text: str):
        self.s = text
        self.n = len(text)
        self.i = 0

    def parse(self) -> Plan:
        plan = self._parse_expr()
        self._skip_ws()
        if self.i != self.n:
            raise UnitFormatError(f"Unexpected trailing input at {self.i}: {self.s[self.i:self.i+10]!r}")
        return plan

    # expr := term (('*' | '·' | '/') term)*
    def _parse_expr(self) -> Plan:
        left = self._parse_term()
        while True:
            self._skip_ws()
            if (self._peek('*') and not self._peek('**')) or self._peek('·'):
                self.i += 1
                right = self._parse_term()
                left = ("mul", left, right)
            elif self._peek('/'):
                self._eat('/')
                right = self._parse_term()
                left = ("div", left, right)
            else:
                break
        return left

    # term := factor [('^' | '**') signed_int]
    def _parse_term(self) -> Plan:
        base = self._parse_factor()
        self._skip_ws()
        if self._peek('**'):
            self._eat('**')
            base = ("pow", base, self._parse_signed_int())
        elif self._peek('^'):
            self._eat('^')
            base = ("pow", base, self._parse_signed_int())
        return base

    # factor := NUMBER | NAME | '(' expr ')'
    def _parse_factor(self) -> Plan:
        self._skip_ws()
        if self._peek('('):
            self._eat('(')
            val = self._parse_expr()
            self._skip_ws()
            self._eat(')')
            return val
        number = self._parse_number()
        if number is not None:
            return ("number", number, None)
        name = self._parse_name()
        if not name:
            ch = self.s[self.i:self.i+1]
            raise UnitFormatError(f"Expected unit name, number or '(' at {self.i}, got {ch!r}")
        return ("name", name, None)

    # ---- token helpers ----
    def _parse_number(self):
        m = _NUMBER_RE.match(self.s, self.i)
        if not m:
            return None
        self.i = m.end()
        value = Fraction(m.group())
        if value <= 0:
            raise UnitFormatError(f"Numeric factors must be positive, got {m.group()!r}")
        return value

    def _parse_name(self):
        self._skip_ws()
        i0 = self.i
        if i0 < self.n and (self.s[i0].isalpha() or self.s[i0] == '_'):
            self.i += 1
            while self.i < self.n and (self.s[self.i].isalnum() or self.s[self.i] == '_'):
                self.i += 1
            return self.s[i0:self.i]
        return None

    def _parse_signed_int(self) -> int:
        self._skip_ws()
        i0 = self.i
        if self.i < self.n and self.s[self.i] in '+-':
            self.i += 1
        i1 = self.i
        while self.i < self.n and self.s[self.i].isdigit():
            self.i += 1
        if i1 == self.i:
            raise UnitFormatError(f"Expected integer exponent at {self.i}")
        return int(self.s[i0:self.i])

    def _skip_ws(self):
        s, n, i = self.s, self.n, self.i
        while i < n and s[i].isspace():
            i += 1
        self.i = i

    def _peek(self, tok: str) -> bool:
        self._skip_ws()
        return self.s.startswith(tok, self.i)

    def _eat(self, tok: str):
        if not self._peek(tok):
            got = self.s[self.i:self.i+len(tok)]
            raise UnitFormatError(f"Expected {tok!r} at {self.i}, got {got!r}")
        self.i += len(tok)

# ---------------- Evaluation of a plan against a given registry ----------------
def _eval_plan(plan: Plan, reg: "UnitsRegistry") -> Factor:
    kind = plan[0]
    if kind == "name":
        name = plan[1]
        try:
            return reg.get(name)  # late binding to the provided registry
        except UnitFormatError as e:
            raise UnitFormatError(f"Unknown unit '{name}': {e}") from None
    elif kind == "number":
        try:
            return NumberFactor(plan[1])
        except InvalidFactorError as e:
            raise UnitFormatError(str(e)) from e
    elif kind == "pow":
        base = _eval_plan(plan[1], reg)
        return base.pow(plan[2])
    elif kind == "mul":
        return multiply(_eval_plan(plan[1], reg), _eval_plan(plan[2], reg))
    elif kind == "div":
        return divide(_eval_plan(plan[1], reg), _eval_plan(plan[2], reg))
    else:
        raise RuntimeError(f"Invalid plan node: {plan!r}")

# ---------------- Public API with caching-safe compilation ----------------
# Cache the *compiled plan* only. Safe across registries because there's no bound objects inside.
@lru_cache(maxsize=4096)
def _compile_unit_expr(expr: str) -> Plan:
    if not expr.strip():
        raise UnitFormatError("Unit expression must not be empty.")
    bad = sorted({c for c in expr if c in _DISALLOWED})
    if bad:
        raise UnitFormatError(
            f"Unexpected character(s) {''.join(bad)!r}; only names, positive numbers, "
            "*, /, ^ (or **), parentheses and signed integer exponents are allowed."
        )
    plan = _UnitExprParser(expr).parse()
    logger.debug("compiled unit expression %r", expr)
    return plan

def parse_units_expr(expr: str, reg: "UnitsRegistry") -> Factor:
    """
    Parse a unit expression like 'kg*m/s^2' or '10^3*m' into a canonical Factor.

    Caching-safety:
      * We cache a compiled syntax plan keyed by `expr` only (no registry state).
      * Evaluation binds names to factors from the *provided* `reg` at call time.

    Raises:
      TypeError        if `expr` is not a string.
      UnitFormatError  if `expr` is empty, malformed, or names an unknown unit.
    """
    if not isinstance(expr, str):
        raise TypeError(f"Unit expression must be a string, got {type(expr).__name__}")
    plan = _compile_unit_expr(expr)
    return _eval_plan(plan, reg)
