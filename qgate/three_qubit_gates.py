"""
Three-qubit gates.

Matrices use the basis |control_0 control_1 target> with control_0 as the
most significant bit. Each gate decomposes into one- and two-qubit gates
built on the ancilla-free Toffoli ladder.
"""

import numpy as np

from .circuit import Circuit
from .decomposition import (
    controlled_controlled_phase_ladder,
    log_decomposition,
    toffoli_circuit,
)
from .operation import PARAMETER, QUBIT, GateOperation, Rotate
from .single_qubit_gates import PhaseShiftState1
from .two_qubit_gates import CNOT

__all__ = [
    "ThreeQubitGateOperation",
    "ControlledControlledPauliZ", "ControlledControlledPhaseShift", "Toffoli",
    "ControlledSWAP",
    "PhaseShiftedControlledControlledZ", "PhaseShiftedControlledControlledPhase",
]


def _tags(name, rotation=False):
    tags = ("Operation", "GateOperation", "ThreeQubitGateOperation")
    if rotation:
        tags += ("Rotation",)
    return tags + (name,)


def _popcount_phases(phi):
    """diag(e^{i*phi*popcount(k)}) for k = 0..7"""
    return np.array([np.exp(1j * phi * bin(k).count("1")) for k in range(8)])


class ThreeQubitGateOperation(GateOperation, abstract=True):
    """Base class of gates acting on three qubits."""

    _fields = (("control_0", QUBIT), ("control_1", QUBIT), ("target", QUBIT))

    def circuit(self):
        """Equivalent circuit of one- and two-qubit gates."""
        raise NotImplementedError


class ControlledControlledPauliZ(ThreeQubitGateOperation):
    """PauliZ on the target if both controls are |1>."""

    _tags = _tags("ControlledControlledPauliZ")
    _min_version = (1, 3, 0)

    def unitary_matrix(self):
        return np.diag([1, 1, 1, 1, 1, 1, 1, -1]).astype(complex)

    def circuit(self):
        ladder = controlled_controlled_phase_ladder(
            self.control_0, self.control_1, self.target
        )
        return log_decomposition(self, Circuit(ladder))


class ControlledControlledPhaseShift(Rotate, ThreeQubitGateOperation):
    """Phase e^{i*theta} on |111>."""

    _fields = ThreeQubitGateOperation._fields + (("theta", PARAMETER),)
    _tags = _tags("ControlledControlledPhaseShift", rotation=True)
    _min_version = (1, 3, 0)

    def unitary_matrix(self):
        return np.diag([1] * 7 + [np.exp(1j * float(self.theta))]).astype(complex)

    def circuit(self):
        ladder = controlled_controlled_phase_ladder(
            self.control_0, self.control_1, self.target, self.theta
        )
        return log_decomposition(self, Circuit(ladder))


class Toffoli(ThreeQubitGateOperation):
    """PauliX on the target if both controls are |1>."""

    _tags = _tags("Toffoli")
    _min_version = (1, 3, 0)

    def unitary_matrix(self):
        matrix = np.eye(8, dtype=complex)
        matrix[[6, 7]] = matrix[[7, 6]]
        return matrix

    def circuit(self):
        return log_decomposition(
            self, toffoli_circuit(self.control_0, self.control_1, self.target)
        )


class ControlledSWAP(ThreeQubitGateOperation):
    """Fredkin gate: exchanges target_0 and target_1 if the control is |1>."""

    _fields = (("control", QUBIT), ("target_0", QUBIT), ("target_1", QUBIT))
    _tags = _tags("ControlledSWAP")
    _min_version = (1, 5, 0)

    def unitary_matrix(self):
        matrix = np.eye(8, dtype=complex)
        matrix[[5, 6]] = matrix[[6, 5]]
        return matrix

    def circuit(self):
        circuit = Circuit([CNOT(self.target_1, self.target_0)])
        circuit += toffoli_circuit(self.control, self.target_0, self.target_1)
        circuit += CNOT(self.target_1, self.target_0)
        return log_decomposition(self, circuit)


class PhaseShiftedControlledControlledZ(ThreeQubitGateOperation):
    """ControlledControlledPauliZ with a phase shift phi on every qubit."""

    _fields = ThreeQubitGateOperation._fields + (("phi", PARAMETER),)
    _tags = _tags("PhaseShiftedControlledControlledZ")
    _min_version = (1, 5, 0)

    def unitary_matrix(self):
        diagonal = _popcount_phases(float(self.phi))
        diagonal[7] *= -1
        return np.diag(diagonal)

    def circuit(self):
        circuit = Circuit(controlled_controlled_phase_ladder(
            self.control_0, self.control_1, self.target
        ))
        circuit += [PhaseShiftState1(qubit, self.phi) for qubit in self.qubits]
        return log_decomposition(self, circuit)


class PhaseShiftedControlledControlledPhase(ThreeQubitGateOperation):
    """ControlledControlledPhaseShift(theta) with a phase shift phi on every qubit."""

    _fields = ThreeQubitGateOperation._fields + (
        ("theta", PARAMETER),
        ("phi", PARAMETER),
    )
    _tags = _tags("PhaseShiftedControlledControlledPhase")
    _min_version = (1, 5, 0)

    def unitary_matrix(self):
        diagonal = _popcount_phases(float(self.phi))
        diagonal[7] *= np.exp(1j * float(self.theta))
        return np.diag(diagonal)

    def circuit(self):
        circuit = Circuit(controlled_controlled_phase_ladder(
            self.control_0, self.control_1, self.target, self.theta
        ))
        circuit += [PhaseShiftState1(qubit, self.phi) for qubit in self.qubits]
        return log_decomposition(self, circuit)
