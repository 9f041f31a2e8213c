"""
Four-qubit gates: triple-controlled Pauli and phase gates.

Matrices use the basis |control_0 control_1 control_2 target>. The
decompositions use the parity-phase network of qgate.decomposition.
"""

import math

import numpy as np

from .circuit import Circuit
from .decomposition import log_decomposition, multi_controlled_phase_circuit
from .operation import PARAMETER, QUBIT, GateOperation, Rotate
from .single_qubit_gates import Hadamard

__all__ = [
    "FourQubitGateOperation",
    "TripleControlledPauliX", "TripleControlledPauliZ", "TripleControlledPhaseShift",
]


def _tags(name, rotation=False):
    # Four-qubit gates are classified as multi-qubit gates
    tags = ("Operation", "GateOperation", "MultiQubitGateOperation")
    if rotation:
        tags += ("Rotation",)
    return tags + (name,)


class FourQubitGateOperation(GateOperation, abstract=True):
    """Base class of gates acting on four qubits."""

    _fields = (
        ("control_0", QUBIT),
        ("control_1", QUBIT),
        ("control_2", QUBIT),
        ("target", QUBIT),
    )
    _min_version = (1, 15, 0)

    def circuit(self):
        """Equivalent circuit of one- and two-qubit gates."""
        raise NotImplementedError


class TripleControlledPauliX(FourQubitGateOperation):
    """PauliX on the target if all three controls are |1>."""

    _tags = _tags("TripleControlledPauliX")

    def unitary_matrix(self):
        matrix = np.eye(16, dtype=complex)
        matrix[[14, 15]] = matrix[[15, 14]]
        return matrix

    def circuit(self):
        circuit = Circuit([Hadamard(self.target)])
        circuit += multi_controlled_phase_circuit(self.qubits, math.pi)
        circuit += Hadamard(self.target)
        return log_decomposition(self, circuit)


class TripleControlledPauliZ(FourQubitGateOperation):
    """PauliZ on the target if all three controls are |1>."""

    _tags = _tags("TripleControlledPauliZ")

    def unitary_matrix(self):
        matrix = np.eye(16, dtype=complex)
        matrix[-1, -1] = -1
        return matrix

    def circuit(self):
        return log_decomposition(
            self, multi_controlled_phase_circuit(self.qubits, math.pi)
        )


class TripleControlledPhaseShift(Rotate, FourQubitGateOperation):
    """Phase e^{i*theta} on |1111>."""

    _fields = FourQubitGateOperation._fields + (("theta", PARAMETER),)
    _tags = _tags("TripleControlledPhaseShift", rotation=True)

    def unitary_matrix(self):
        matrix = np.eye(16, dtype=complex)
        matrix[-1, -1] = np.exp(1j * float(self.theta))
        return matrix

    def circuit(self):
        return log_decomposition(
            self, multi_controlled_phase_circuit(self.qubits, self.theta)
        )
