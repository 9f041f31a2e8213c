"""
Gates acting on a list of qubits.

MultiQubitMS, MultiQubitZZ, MultiQubitCNOT and QFT carry their qubits as
an ordered list, the first qubit being the most significant bit of the
unitary. CallDefinedGate refers to a gate defined elsewhere by name.
"""

import numpy as np

from .decomposition import (
    log_decomposition,
    multi_controlled_not_circuit,
    multi_qubit_ms_circuit,
    multi_qubit_zz_circuit,
    qft_circuit,
)
from .matrices import bit_reversal_permutation
from .operation import FLAG, NAME, PARAMETER, PARAMETERS, QUBITS, GateOperation, Operation, Rotate

__all__ = [
    "MultiQubitGateOperation",
    "MultiQubitMS", "MultiQubitZZ", "MultiQubitCNOT", "QFT", "CallDefinedGate",
]


def _tags(name):
    return ("Operation", "GateOperation", "MultiQubitGateOperation", name)


class MultiQubitGateOperation(GateOperation, abstract=True):
    """Base class of gates acting on an arbitrary list of qubits."""

    _fields = (("qubits", QUBITS),)

    def circuit(self):
        """Equivalent circuit of one- and two-qubit gates."""
        raise NotImplementedError


class MultiQubitMS(Rotate, MultiQubitGateOperation):
    """Mølmer-Sørensen gate on many qubits: exp(-i*theta/2 * X⊗...⊗X).

    Args:
        qubits: The qubits the gate acts on
        theta: Rotation angle

    Example:
        >>> gate = MultiQubitMS([0, 1], math.pi / 2)
        >>> [op.hqslang() for op in gate.circuit()]
        ['Hadamard', 'Hadamard', 'CNOT', 'RotateZ', 'CNOT', 'Hadamard', 'Hadamard']
    """

    _fields = MultiQubitGateOperation._fields + (("theta", PARAMETER),)
    _tags = _tags("MultiQubitMS")

    def unitary_matrix(self):
        dimension = 2 ** len(self.qubits)
        c = np.cos(float(self.theta) / 2.0)
        s = np.sin(float(self.theta) / 2.0)
        # X⊗...⊗X maps k to its bitwise complement: the anti-diagonal
        return c * np.eye(dimension, dtype=complex) - 1j * s * np.fliplr(
            np.eye(dimension, dtype=complex)
        )

    def circuit(self):
        return log_decomposition(self, multi_qubit_ms_circuit(self.qubits, self.theta))


class MultiQubitZZ(Rotate, MultiQubitGateOperation):
    """ZZ rotation on many qubits: exp(-i*theta/2 * Z⊗...⊗Z)."""

    _fields = MultiQubitGateOperation._fields + (("theta", PARAMETER),)
    _tags = _tags("MultiQubitZZ")

    def unitary_matrix(self):
        dimension = 2 ** len(self.qubits)
        phase = np.exp(-0.5j * float(self.theta))
        parities = np.array([bin(k).count("1") % 2 for k in range(dimension)])
        return np.diag(np.where(parities == 0, phase, phase.conjugate()))

    def circuit(self):
        return log_decomposition(self, multi_qubit_zz_circuit(self.qubits, self.theta))


class MultiQubitCNOT(MultiQubitGateOperation):
    """PauliX on the last qubit controlled by all other qubits."""

    _tags = _tags("MultiQubitCNOT")
    _min_version = (1, 10, 0)

    def unitary_matrix(self):
        if not self.qubits:
            raise ValueError("MultiQubitCNOT needs at least one qubit")
        dimension = 2 ** len(self.qubits)
        matrix = np.eye(dimension, dtype=complex)
        matrix[[dimension - 2, dimension - 1]] = matrix[[dimension - 1, dimension - 2]]
        return matrix

    def circuit(self):
        return log_decomposition(self, multi_controlled_not_circuit(self.qubits))


class QFT(MultiQubitGateOperation):
    """Quantum Fourier transform.

    Args:
        qubits: The qubits, first one most significant
        swaps: Reverse the qubit order at the end (forward) or at the start
            (inverse) so that the matrix is the plain discrete Fourier transform
        inverse: Apply the inverse transform

    Without swaps the forward matrix is the Fourier matrix with bit-reversed
    rows. The inverse matrix is always the adjoint of the forward one. The
    inverse circuit applies the same ladder with negated angles, so its
    unitary equals the inverse matrix with the qubit order reversed.
    """

    _fields = MultiQubitGateOperation._fields + (("swaps", FLAG), ("inverse", FLAG))
    _tags = _tags("QFT")
    _min_version = (1, 8, 0)

    def unitary_matrix(self):
        number_qubits = len(self.qubits)
        dimension = 2 ** number_qubits
        indices = np.arange(dimension)
        exponents = np.outer(indices, indices) % dimension
        matrix = np.exp(2j * np.pi * exponents / dimension) / np.sqrt(dimension)
        if not self.swaps:
            matrix = matrix[bit_reversal_permutation(number_qubits), :]
        if self.inverse:
            matrix = matrix.conj().T
        return matrix

    def circuit(self):
        """Hadamard / controlled-phase ladder, with SWAPs if swaps is set.

        For the forward transform the circuit's unitary equals
        unitary_matrix(). For inverse=True it equals R @ unitary_matrix() @ R,
        with R the qubit-order reversal, since the inverse ladder is the
        forward one with negated angles and not its reversed sequence.
        """
        return log_decomposition(self, qft_circuit(self.qubits, self.swaps, self.inverse))


class CallDefinedGate(Operation):
    """Call of a gate defined elsewhere under gate_name.

    The definition is resolved by an external registry, so this operation
    has no unitary matrix of its own.

    Args:
        gate_name: Name of the defined gate
        qubits: Qubits the definition is applied to
        free_parameters: Values for the definition's free parameters
    """

    _fields = (
        ("gate_name", NAME),
        ("qubits", QUBITS),
        ("free_parameters", PARAMETERS),
    )
    _tags = ("Operation", "MultiQubitGateOperation", "CallDefinedGate")
    _min_version = (1, 13, 0)
