"""
Decomposition engine.

Builds the circuits returned by circuit() of composite gates. Every builder
is a pure function of the gate's qubits and (possibly symbolic) parameters
and emits only single- and two-qubit gates:

    Mølmer-Sørensen / ZZ   CNOT staircase around a RotateZ on the last qubit
    Toffoli ladder         the ancilla-free T/CNOT circuit for three qubits
    parity-phase network   multi-controlled phases on any number of qubits
    QFT                    Hadamard + controlled-phase ladder, optional SWAPs

Parity-phase network:
    The phase theta * x_0 * x_1 * ... * x_{n-1} on a basis state equals
    sum over non-empty subsets S of (-1)^{|S|-1} * theta / 2^{n-1} * parity_S(x).
    The subsets whose highest qubit is q_k are visited in Gray-code order over
    q_0 .. q_{k-1}: each step folds one qubit into q_k with a CNOT and applies
    PhaseShiftState1(q_k, +-theta / 2^{n-1}); a closing CNOT restores q_k.
    The result is exact (no global phase) and needs no ancilla qubits.
"""

import math

from .circuit import Circuit
from .logging_config import get_logger
from .single_qubit_gates import Hadamard, PauliX, PhaseShiftState1, RotateZ, TGate
from .symbolic import SymbolicFloat
from .two_qubit_gates import CNOT, SWAP, ControlledPhaseShift

__all__ = [
    "multi_qubit_ms_circuit", "multi_qubit_zz_circuit",
    "controlled_controlled_phase_ladder", "toffoli_circuit",
    "multi_controlled_phase_circuit", "multi_controlled_not_circuit",
    "qft_circuit",
]

logger = get_logger(__name__)


def _require_qubits(qubits, minimum, name):
    if len(qubits) < minimum:
        raise ValueError(f"{name} needs at least {minimum} qubit(s), got {len(qubits)}")


def _cnot_staircase(qubits):
    return [CNOT(qubits[i], qubits[i + 1]) for i in range(len(qubits) - 1)]


# ============================================================================
# PAULI-STRING ROTATIONS
# ============================================================================


def multi_qubit_zz_circuit(qubits, theta):
    """exp(-i*theta/2 * Z⊗...⊗Z) as CNOTs around a RotateZ on the last qubit."""
    qubits = list(qubits)
    _require_qubits(qubits, 1, "MultiQubitZZ")
    staircase = _cnot_staircase(qubits)
    circuit = Circuit(staircase)
    circuit += RotateZ(qubits[-1], theta)
    circuit += list(reversed(staircase))
    return circuit


def multi_qubit_ms_circuit(qubits, theta):
    """exp(-i*theta/2 * X⊗...⊗X): the ZZ circuit conjugated by Hadamards."""
    qubits = list(qubits)
    _require_qubits(qubits, 1, "MultiQubitMS")
    circuit = Circuit(Hadamard(qubit) for qubit in qubits)
    circuit += multi_qubit_zz_circuit(qubits, theta)
    circuit += [Hadamard(qubit) for qubit in qubits]
    return circuit


# ============================================================================
# THREE-QUBIT LADDERS
# ============================================================================


def controlled_controlled_phase_ladder(control_0, control_1, target, theta=None):
    """Diagonal phase theta on |111> from CNOTs and single-qubit phases.

    Without theta the phase is pi (ControlledControlledPauliZ) and the
    quarter phases are emitted as TGate / PhaseShiftState1(-pi/4).

    Returns:
        list of 13 operations; the first 9 touch the target, the last 4
        only the controls
    """
    if theta is None:
        def plus(qubit):
            return TGate(qubit)

        def minus(qubit):
            return PhaseShiftState1(qubit, -math.pi / 4.0)
    else:
        quarter = SymbolicFloat(theta) / 4.0

        def plus(qubit):
            return PhaseShiftState1(qubit, quarter)

        def minus(qubit):
            return PhaseShiftState1(qubit, -quarter)

    return [
        CNOT(control_1, target),
        minus(target),
        CNOT(control_0, target),
        plus(target),
        CNOT(control_1, target),
        minus(target),
        CNOT(control_0, target),
        plus(control_1),
        plus(target),
        CNOT(control_0, control_1),
        plus(control_0),
        minus(control_1),
        CNOT(control_0, control_1),
    ]


def toffoli_circuit(control_0, control_1, target):
    """Ancilla-free Toffoli: Hadamards on the target around the CCZ ladder."""
    ladder = controlled_controlled_phase_ladder(control_0, control_1, target)
    circuit = Circuit([Hadamard(target)])
    circuit += ladder[:9]
    circuit += Hadamard(target)
    circuit += ladder[9:]
    return circuit


# ============================================================================
# PARITY-PHASE NETWORK
# ============================================================================


def multi_controlled_phase_circuit(qubits, theta):
    """Phase e^{i*theta} on the all-ones state of the given qubits.

    Args:
        qubits: The qubits (order only changes the gate sequence)
        theta: Float or symbolic phase

    Returns:
        Circuit of CNOT and PhaseShiftState1 gates
    """
    qubits = list(qubits)
    _require_qubits(qubits, 1, "A multi-controlled phase")
    number_qubits = len(qubits)
    angle = SymbolicFloat(theta) / float(2 ** (number_qubits - 1))

    circuit = Circuit()
    for highest in range(number_qubits - 1, -1, -1):
        accumulator = qubits[highest]
        lower = qubits[:highest]
        previous = 0
        for step in range(2 ** highest):
            gray = step ^ (step >> 1)
            flipped = gray ^ previous
            if flipped:
                circuit += CNOT(lower[flipped.bit_length() - 1], accumulator)
            # The subset holds the accumulator plus the set bits of gray
            if bin(gray).count("1") % 2 == 0:
                circuit += PhaseShiftState1(accumulator, angle)
            else:
                circuit += PhaseShiftState1(accumulator, -angle)
            previous = gray
        if previous:
            circuit += CNOT(lower[previous.bit_length() - 1], accumulator)
    return circuit


def multi_controlled_not_circuit(qubits):
    """PauliX on the last qubit controlled by all others.

    One qubit gives PauliX, two a CNOT, three the Toffoli ladder; larger
    registers use Hadamards around the parity-phase network with phase pi.
    """
    qubits = list(qubits)
    _require_qubits(qubits, 1, "MultiQubitCNOT")
    if len(qubits) == 1:
        return Circuit([PauliX(qubits[0])])
    if len(qubits) == 2:
        return Circuit([CNOT(qubits[0], qubits[1])])
    if len(qubits) == 3:
        return toffoli_circuit(*qubits)
    target = qubits[-1]
    circuit = Circuit([Hadamard(target)])
    circuit += multi_controlled_phase_circuit(qubits, math.pi)
    circuit += Hadamard(target)
    return circuit


# ============================================================================
# QUANTUM FOURIER TRANSFORM
# ============================================================================


def qft_circuit(qubits, swaps, inverse):
    """Hadamard / controlled-phase ladder of the quantum Fourier transform.

    Qubit i gets a Hadamard followed by ControlledPhaseShift(q_j, q_i,
    +-pi / 2^{j-i}) for every later qubit j. With swaps the qubit order is
    reversed by SWAP gates, after the ladder for the forward transform and
    before it for the inverse.
    """
    qubits = list(qubits)
    number_qubits = len(qubits)
    sign = -1.0 if inverse else 1.0
    swap_gates = [
        SWAP(qubits[i], qubits[number_qubits - 1 - i]) for i in range(number_qubits // 2)
    ]

    circuit = Circuit()
    if swaps and inverse:
        circuit += swap_gates
    for i in range(number_qubits):
        circuit += Hadamard(qubits[i])
        for j in range(i + 1, number_qubits):
            circuit += ControlledPhaseShift(
                qubits[j], qubits[i], sign * (math.pi / 2 ** (j - i))
            )
    if swaps and not inverse:
        circuit += swap_gates
    return circuit


def log_decomposition(operation, circuit):
    """Emit a debug record for a finished decomposition and return the circuit."""
    logger.debug("Decomposed %r into %d operations", operation, len(circuit))
    return circuit
