"""
Gate algebra: products of single-qubit gates and powers of rotations.

Both work on SymbolicFloat parameters, so they apply to symbolic gates as
well as to numeric ones.
"""

from .errors import MultiplicationIncompatibleQubits
from .operation import Rotate
from .single_qubit_gates import SingleQubitGate, SingleQubitGateOperation

__all__ = ["multiply", "power"]


def multiply(gate_a, gate_b):
    """Product of two single-qubit gates on the same qubit.

    The result has matrix U_a @ U_b, i.e. gate_b is applied first. In the
    canonical form with alpha = alpha_r + i*alpha_i, beta = beta_r + i*beta_i:

        alpha = alpha_a * alpha_b - conj(beta_a) * beta_b
        beta = beta_a * alpha_b + conj(alpha_a) * beta_b
        global_phase = global_phase_a + global_phase_b

    Args:
        gate_a: Left factor
        gate_b: Right factor

    Returns:
        SingleQubitGate

    Raises:
        MultiplicationIncompatibleQubits: If the gates act on different qubits
    """
    for gate in (gate_a, gate_b):
        if not isinstance(gate, SingleQubitGateOperation):
            raise TypeError(f"Cannot multiply {type(gate).__name__}: not a single-qubit gate")
    if gate_a.qubit != gate_b.qubit:
        raise MultiplicationIncompatibleQubits(gate_a.qubit, gate_b.qubit)

    ar_a, ai_a, br_a, bi_a, phase_a = gate_a._canonical()
    ar_b, ai_b, br_b, bi_b, phase_b = gate_b._canonical()

    # conj(beta_a) = br_a - i*bi_a, conj(alpha_a) = ar_a - i*ai_a
    alpha_r = (ar_a * ar_b - ai_a * ai_b) - (br_a * br_b + bi_a * bi_b)
    alpha_i = (ar_a * ai_b + ai_a * ar_b) - (br_a * bi_b - bi_a * br_b)
    beta_r = (br_a * ar_b - bi_a * ai_b) + (ar_a * br_b + ai_a * bi_b)
    beta_i = (br_a * ai_b + bi_a * ar_b) + (ar_a * bi_b - ai_a * br_b)

    return SingleQubitGate(
        gate_a.qubit, alpha_r, alpha_i, beta_r, beta_i, phase_a + phase_b
    )


def power(gate, exponent):
    """Raise a rotation gate to a power by scaling its angle theta.

    Args:
        gate: Gate with a rotation angle (RotateX, XY, MultiQubitMS, ...)
        exponent: float, str or SymbolicFloat

    Returns:
        Gate of the same class with theta replaced by exponent * theta

    Raises:
        TypeError: If the gate has no rotation angle
    """
    if not isinstance(gate, Rotate):
        raise TypeError(f"{type(gate).__name__} can not be raised to a power")
    return gate.powercf(exponent)
