"""
Exception hierarchy for qgate.

Every fallible operation in the package raises one of these. The diagnostic
values are kept as attributes so callers can inspect them without parsing
messages.
"""


class QgateError(Exception):
    """Base class of all qgate errors."""


class CalculatorError(QgateError):
    """Symbolic parameter handling failed (parsing, lookup or evaluation)."""


class FloatSymbolicNotConvertable(CalculatorError):
    """A symbolic value could not be reduced to a float.

    Args:
        val: The expression string that failed to evaluate
        reason: Optional human-readable detail
    """

    def __init__(self, val, reason=None):
        self.val = val
        self.reason = reason
        message = f"Symbolic value {val!r} can not be converted to float"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class UnitaryMatrixError(QgateError):
    """The canonical single-qubit parameters do not describe a unitary."""

    def __init__(self, alpha_r, alpha_i, beta_r, beta_i, norm):
        self.alpha_r = alpha_r
        self.alpha_i = alpha_i
        self.beta_r = beta_r
        self.beta_i = beta_i
        self.norm = norm
        super().__init__(
            f"Resulting gate matrix is not unitary: alpha_r={alpha_r}, "
            f"alpha_i={alpha_i}, beta_r={beta_r}, beta_i={beta_i}, norm={norm}"
        )


class QubitMappingError(QgateError):
    """A qubit of an operation is missing from a remapping table."""

    def __init__(self, qubit):
        self.qubit = qubit
        super().__init__(f"Qubit {qubit} can not be remapped: not in mapping")


class MultiplicationIncompatibleQubits(QgateError):
    """Two single-qubit gates acting on different qubits were multiplied."""

    def __init__(self, qubit_a, qubit_b):
        self.qubit_a = qubit_a
        self.qubit_b = qubit_b
        super().__init__(
            f"Qubits {qubit_a} and {qubit_b} incompatible: "
            f"gates must act on the same qubit to be multiplied"
        )
