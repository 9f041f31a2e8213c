"""
Symbolic gate parameters.

A SymbolicFloat is either a float literal or an expression string over named
variables such as "theta" or "(2.0 * theta)". Arithmetic on literals stays
numeric; as soon as one operand is symbolic the result is a new expression
string that records the operation. Evaluation parses the string with SymPy
and substitutes a table of variable bindings held by a Calculator.

Example:
    >>> theta = SymbolicFloat("theta")
    >>> half = theta / 2
    >>> half
    SymbolicFloat('(theta / 2.0)')
    >>> half.substitute({"theta": 3.0})
    SymbolicFloat(1.5)
"""

import ast
import math
import numbers
import re
from collections.abc import Mapping
from functools import lru_cache
from tokenize import TokenError

import sympy
from sympy.parsing.sympy_parser import (
    convert_xor,
    parse_expr,
    standard_transformations,
)

from .config import get_config
from .errors import CalculatorError, FloatSymbolicNotConvertable
from .logging_config import get_logger

__all__ = ["SymbolicFloat", "Calculator", "as_calculator"]

logger = get_logger(__name__)

# ============================================================================
# EXPRESSION PARSING
# ============================================================================

_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_NUMBER = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")

_FUNCTIONS = {
    "sin": sympy.sin,
    "cos": sympy.cos,
    "tan": sympy.tan,
    "asin": sympy.asin,
    "acos": sympy.acos,
    "atan": sympy.atan,
    "atan2": sympy.atan2,
    "sinh": sympy.sinh,
    "cosh": sympy.cosh,
    "tanh": sympy.tanh,
    "exp": sympy.exp,
    "log": sympy.log,
    "sqrt": sympy.sqrt,
    "abs": sympy.Abs,
    "Abs": sympy.Abs,
    "sign": sympy.sign,
}

_CONSTANTS = {
    "pi": sympy.pi,
    "oo": sympy.oo,
    "nan": sympy.nan,
}

# Names the SymPy tokenizer emits itself when it wraps literals
_PARSER_NAMES = {"Integer", "Float", "Rational", "Symbol"}

_TRANSFORMATIONS = standard_transformations + (convert_xor,)

# Syntax allowed in expression strings: arithmetic on numbers and names and
# calls of the known functions
_ALLOWED_OPERATORS = (
    ast.Add, ast.Sub, ast.Mult, ast.Div, ast.Pow, ast.BitXor, ast.UAdd, ast.USub,
)


def _check_arithmetic(expression):
    """Reject anything but plain arithmetic before SymPy evaluates the string.

    Raises:
        FloatSymbolicNotConvertable: For syntax errors and for attribute
            access, subscripts, string literals, lambdas and calls of
            unknown functions
    """
    try:
        tree = ast.parse(expression.strip(), mode="eval")
    except SyntaxError as err:
        raise FloatSymbolicNotConvertable(expression, f"parsing failed ({err})") from err

    for node in ast.walk(tree):
        if isinstance(node, (ast.Expression, ast.Load) + _ALLOWED_OPERATORS):
            continue
        if isinstance(node, (ast.BinOp, ast.UnaryOp)):
            continue
        if isinstance(node, ast.Name) and not node.id.startswith("__"):
            continue
        if isinstance(node, ast.Constant) and type(node.value) in (int, float):
            continue
        if (
            isinstance(node, ast.Call)
            and isinstance(node.func, ast.Name)
            and node.func.id in _FUNCTIONS
            and not node.keywords
        ):
            continue
        raise FloatSymbolicNotConvertable(
            expression, f"not an arithmetic expression ({type(node).__name__})"
        )


def _parse_expression(expression):
    """Parse an expression string into a SymPy expression.

    Every identifier that is not a known function or constant becomes a free
    Symbol, so variable names like 'beta', 'gamma' or 'E' never collide with
    SymPy's own namespace.
    """
    _check_arithmetic(expression)
    local_dict = {}
    for name in set(_IDENTIFIER.findall(expression)):
        if name in _FUNCTIONS:
            local_dict[name] = _FUNCTIONS[name]
        elif name in _CONSTANTS:
            local_dict[name] = _CONSTANTS[name]
        elif name not in _PARSER_NAMES:
            local_dict[name] = sympy.Symbol(name)
    try:
        parsed = parse_expr(
            expression, local_dict=local_dict, transformations=_TRANSFORMATIONS
        )
    except (SyntaxError, TokenError, TypeError, ValueError, NameError, AttributeError) as err:
        raise FloatSymbolicNotConvertable(expression, f"parsing failed ({err})") from err
    if not isinstance(parsed, sympy.Expr):
        raise FloatSymbolicNotConvertable(expression, "not an arithmetic expression")
    return parsed


_parse_cache = None


def _parse(expression):
    """Cached _parse_expression; the cache follows the config parse_cache_size."""
    global _parse_cache
    size = get_config().parse_cache_size
    if _parse_cache is None or _parse_cache.cache_parameters()["maxsize"] != size:
        _parse_cache = lru_cache(maxsize=size)(_parse_expression)
    return _parse_cache(expression)


def _format_float(value):
    """Format a float literal for use inside an expression string."""
    if math.isnan(value):
        return "nan"
    if math.isinf(value):
        return "oo" if value > 0 else "(-oo)"
    if value < 0 or (value == 0 and math.copysign(1.0, value) < 0):
        return f"({value!r})"
    return repr(value)


def _is_atomic(text):
    """True if text can be used as an operand without extra parentheses."""
    if _IDENTIFIER.fullmatch(text) or _NUMBER.fullmatch(text):
        return not text.startswith(("+", "-"))
    match = re.match(r"[A-Za-z_][A-Za-z0-9_]*\(", text)
    start = match.end() - 1 if match else 0
    if not text.startswith("(", start):
        return False
    depth = 0
    for position in range(start, len(text)):
        if text[position] == "(":
            depth += 1
        elif text[position] == ")":
            depth -= 1
            if depth == 0:
                return position == len(text) - 1
    return False


# ============================================================================
# CALCULATOR
# ============================================================================


class Calculator:
    """Table of variable bindings used to evaluate symbolic expressions.

    Args:
        variables: Optional mapping of variable name to value

    Example:
        >>> calc = Calculator({"theta": 0.5})
        >>> calc.evaluate("2 * theta")
        1.0
    """

    def __init__(self, variables=None):
        self._variables = {}
        if variables is not None:
            for name, value in dict(variables).items():
                self.set_variable(name, value)

    @property
    def variables(self):
        """Copy of the binding table."""
        return dict(self._variables)

    def set_variable(self, name, value):
        """Bind a variable name to a float value."""
        if not isinstance(name, str) or not _IDENTIFIER.fullmatch(name):
            raise CalculatorError(f"Invalid variable name {name!r}")
        self._variables[name] = float(value)

    def get_variable(self, name):
        """Return the value bound to name.

        Raises:
            CalculatorError: If the variable is not set
        """
        try:
            return self._variables[name]
        except KeyError:
            raise CalculatorError(f"Variable {name!r} not set") from None

    def evaluate(self, expression):
        """Evaluate an expression string to a finite real float.

        Args:
            expression: Expression over the bound variables

        Returns:
            float

        Raises:
            FloatSymbolicNotConvertable: If the expression can not be parsed,
                references an unbound variable, or has no finite real value
        """
        parsed = _parse(expression)
        unbound = sorted(
            symbol.name
            for symbol in parsed.free_symbols
            if symbol.name not in self._variables
        )
        if unbound:
            logger.debug("Unbound variables %s in %r", unbound, expression)
            raise FloatSymbolicNotConvertable(
                expression, f"unbound variable(s) {', '.join(unbound)}"
            )

        substitutions = {
            symbol: sympy.Float(self._variables[symbol.name])
            for symbol in parsed.free_symbols
        }
        value = parsed.xreplace(substitutions).evalf()
        try:
            result = complex(value)
        except (TypeError, ValueError) as err:
            logger.debug("Expression %r evaluated to %s", expression, value)
            raise FloatSymbolicNotConvertable(
                expression, f"evaluates to {value}"
            ) from err
        if result.imag != 0 or not math.isfinite(result.real):
            logger.debug("Expression %r evaluated to %s", expression, result)
            raise FloatSymbolicNotConvertable(
                expression, f"evaluates to non-finite or complex value {value}"
            )
        return result.real

    def parse_get(self, value):
        """Evaluate a float, expression string or SymbolicFloat."""
        if isinstance(value, SymbolicFloat):
            value = value.value
        if isinstance(value, str):
            return self.evaluate(value)
        if isinstance(value, numbers.Real):
            return float(value)
        raise TypeError(f"Cannot evaluate {type(value)}")

    def __repr__(self):
        return f"Calculator({self._variables!r})"


def as_calculator(bindings):
    """Turn None, a mapping or a Calculator into a Calculator."""
    if bindings is None:
        return Calculator()
    if isinstance(bindings, Calculator):
        return bindings
    if isinstance(bindings, Mapping):
        return Calculator(bindings)
    raise TypeError(f"Cannot use {type(bindings)} as parameter bindings")


# ============================================================================
# SYMBOLIC FLOAT
# ============================================================================


def _coerce(value):
    if isinstance(value, SymbolicFloat):
        return value
    if isinstance(value, (str, numbers.Real)):
        return SymbolicFloat(value)
    return NotImplemented


class SymbolicFloat:
    """Gate parameter that is either a float literal or a symbolic expression.

    Strings are always symbolic, even "1.0": whether a value is parametrized
    depends only on its form, not on whether it could be evaluated.

    Args:
        value: float, int, str or SymbolicFloat (default 0.0)
    """

    __slots__ = ("_value",)

    def __init__(self, value=0.0):
        if isinstance(value, SymbolicFloat):
            value = value._value
        elif isinstance(value, numbers.Real):
            value = float(value)
        elif not isinstance(value, str):
            raise TypeError(f"Cannot create SymbolicFloat from {type(value)}")
        object.__setattr__(self, "_value", value)

    def __setattr__(self, name, value):
        raise AttributeError("SymbolicFloat is immutable")

    @property
    def value(self):
        """The stored float or expression string."""
        return self._value

    def is_float(self):
        return isinstance(self._value, float)

    def is_parametrized(self):
        return isinstance(self._value, str)

    def _is_literal(self, number):
        return self.is_float() and self._value == number

    def _operand(self):
        """String form of this value as an operand of a larger expression."""
        if self.is_float():
            return _format_float(self._value)
        if _is_atomic(self._value):
            return self._value
        return f"({self._value})"

    def _argument(self):
        """String form of this value as a function argument."""
        if self.is_float():
            return _format_float(self._value)
        return self._value

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------

    def __float__(self):
        if self.is_float():
            return self._value
        return Calculator().evaluate(self._value)

    def substitute(self, bindings=None):
        """Evaluate under a binding table and return the literal result.

        Args:
            bindings: dict of variable values or a Calculator

        Returns:
            Literal SymbolicFloat

        Raises:
            FloatSymbolicNotConvertable: If the value can not be evaluated
        """
        if self.is_float():
            return self
        return SymbolicFloat(as_calculator(bindings).evaluate(self._value))

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    def __add__(self, other):
        other = _coerce(other)
        if other is NotImplemented:
            return other
        if self.is_float() and other.is_float():
            return SymbolicFloat(self._value + other._value)
        if self._is_literal(0.0):
            return other
        if other._is_literal(0.0):
            return self
        return SymbolicFloat(f"({self._operand()} + {other._operand()})")

    def __radd__(self, other):
        other = _coerce(other)
        if other is NotImplemented:
            return other
        return other.__add__(self)

    def __sub__(self, other):
        other = _coerce(other)
        if other is NotImplemented:
            return other
        if self.is_float() and other.is_float():
            return SymbolicFloat(self._value - other._value)
        if other._is_literal(0.0):
            return self
        if self._is_literal(0.0):
            return -other
        return SymbolicFloat(f"({self._operand()} - {other._operand()})")

    def __rsub__(self, other):
        other = _coerce(other)
        if other is NotImplemented:
            return other
        return other.__sub__(self)

    def __mul__(self, other):
        other = _coerce(other)
        if other is NotImplemented:
            return other
        if self.is_float() and other.is_float():
            return SymbolicFloat(self._value * other._value)
        if self._is_literal(0.0) or other._is_literal(0.0):
            return SymbolicFloat(0.0)
        if self._is_literal(1.0):
            return other
        if other._is_literal(1.0):
            return self
        return SymbolicFloat(f"({self._operand()} * {other._operand()})")

    def __rmul__(self, other):
        other = _coerce(other)
        if other is NotImplemented:
            return other
        return other.__mul__(self)

    def __truediv__(self, other):
        other = _coerce(other)
        if other is NotImplemented:
            return other
        if other._is_literal(0.0):
            raise ZeroDivisionError(f"Division of {self} by zero")
        if self.is_float() and other.is_float():
            return SymbolicFloat(self._value / other._value)
        if other._is_literal(1.0):
            return self
        if self._is_literal(0.0):
            return SymbolicFloat(0.0)
        return SymbolicFloat(f"({self._operand()} / {other._operand()})")

    def __rtruediv__(self, other):
        other = _coerce(other)
        if other is NotImplemented:
            return other
        return other.__truediv__(self)

    def __pow__(self, other):
        other = _coerce(other)
        if other is NotImplemented:
            return other
        if self.is_float() and other.is_float():
            return SymbolicFloat(math.pow(self._value, other._value))
        return SymbolicFloat(f"({self._operand()} ** {other._operand()})")

    def __rpow__(self, other):
        other = _coerce(other)
        if other is NotImplemented:
            return other
        return other.__pow__(self)

    def powf(self, exponent):
        """Raise to a (possibly symbolic) power."""
        return self ** exponent

    def __neg__(self):
        if self.is_float():
            return SymbolicFloat(-self._value)
        return SymbolicFloat(f"(-{self._operand()})")

    def __pos__(self):
        return self

    def __abs__(self):
        return self._apply("Abs", abs)

    def _apply(self, name, function):
        if self.is_float():
            return SymbolicFloat(function(self._value))
        return SymbolicFloat(f"{name}({self._argument()})")

    def sin(self):
        return self._apply("sin", math.sin)

    def cos(self):
        return self._apply("cos", math.cos)

    def acos(self):
        return self._apply("acos", math.acos)

    def exp(self):
        return self._apply("exp", math.exp)

    def sqrt(self):
        return self._apply("sqrt", math.sqrt)

    def signum(self):
        """Sign of the value: 1.0 for positive (and +0.0), -1.0 for negative."""
        if self.is_float() and math.isnan(self._value):
            return self
        return self._apply("sign", lambda value: math.copysign(1.0, value))

    def recip(self):
        """Reciprocal 1 / x."""
        return SymbolicFloat(1.0) / self

    def atan2(self, other):
        """Two-argument arctangent with self as the y coordinate."""
        other = _coerce(other)
        if other is NotImplemented:
            raise TypeError("atan2 requires a numeric or symbolic argument")
        if self.is_float() and other.is_float():
            return SymbolicFloat(math.atan2(self._value, other._value))
        return SymbolicFloat(f"atan2({self._argument()}, {other._argument()})")

    # ------------------------------------------------------------------
    # Comparison and representation
    # ------------------------------------------------------------------

    def __eq__(self, other):
        other = _coerce(other)
        if other is NotImplemented:
            return other
        return type(self._value) is type(other._value) and self._value == other._value

    def __hash__(self):
        return hash(self._value)

    def __str__(self):
        if self.is_float():
            return repr(self._value)
        return self._value

    def __repr__(self):
        return f"SymbolicFloat({self._value!r})"

    def __reduce__(self):
        return (SymbolicFloat, (self._value,))

    def to_dict(self):
        """Serialized form: {'Float': x} or {'Str': expression}."""
        if self.is_float():
            return {"Float": self._value}
        return {"Str": self._value}

    @classmethod
    def from_dict(cls, data):
        """Inverse of to_dict()."""
        if len(data) != 1:
            raise ValueError(f"Expected exactly one of 'Float' or 'Str', got {data!r}")
        ((kind, value),) = data.items()
        if kind == "Float":
            return cls(float(value))
        if kind == "Str":
            return cls(str(value))
        raise ValueError(f"Unknown SymbolicFloat kind {kind!r}")
