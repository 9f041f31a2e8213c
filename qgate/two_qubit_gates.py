"""
Two-qubit gates.

All matrices use the basis |control target> = |00>, |01>, |10>, |11>, i.e.
the control qubit is the most significant bit. Gates without a natural
control/target distinction still use the two role names for their first and
second qubit.
"""

import math

import numpy as np

from .operation import PARAMETER, QUBIT, GateOperation, Rotate

__all__ = [
    "TwoQubitGateOperation",
    "CNOT", "SWAP", "ISwap", "FSwap", "SqrtISwap", "InvSqrtISwap",
    "XY", "ControlledPhaseShift", "ControlledPauliY", "ControlledPauliZ",
    "MolmerSorensenXX", "VariableMSXX",
    "GivensRotation", "GivensRotationLittleEndian",
    "Qsim", "Fsim", "SpinInteraction", "Bogoliubov",
    "PMInteraction", "ComplexPMInteraction",
    "PhaseShiftedControlledZ", "PhaseShiftedControlledPhase",
    "ControlledRotateX", "ControlledRotateXY", "EchoCrossResonance",
]

_FRAC_1_SQRT_2 = 1.0 / math.sqrt(2.0)


def _tags(name, rotation=False):
    tags = ("Operation", "GateOperation", "TwoQubitGateOperation")
    if rotation:
        tags += ("Rotation",)
    return tags + (name,)


def _outer_inner(outer, inner):
    """4x4 matrix acting with outer on {|00>, |11>} and inner on {|01>, |10>}."""
    matrix = np.zeros((4, 4), dtype=complex)
    matrix[np.ix_([0, 3], [0, 3])] = outer
    matrix[np.ix_([1, 2], [1, 2])] = inner
    return matrix


def _controlled(block):
    """4x4 matrix applying the 2x2 block to the target if the control is |1>."""
    matrix = np.eye(4, dtype=complex)
    matrix[2:, 2:] = block
    return matrix


class TwoQubitGateOperation(GateOperation, abstract=True):
    """Base class of gates acting on two qubits."""

    _fields = (("control", QUBIT), ("target", QUBIT))


# ============================================================================
# FIXED GATES
# ============================================================================


class CNOT(TwoQubitGateOperation):
    """Controlled PauliX."""

    _tags = _tags("CNOT")

    def unitary_matrix(self):
        return _controlled([[0, 1], [1, 0]])


class SWAP(TwoQubitGateOperation):
    _tags = _tags("SWAP")

    def unitary_matrix(self):
        return _outer_inner(np.eye(2), [[0, 1], [1, 0]])


class ISwap(TwoQubitGateOperation):
    """SWAP with a phase i on the exchanged states."""

    _tags = _tags("ISwap")

    def unitary_matrix(self):
        return _outer_inner(np.eye(2), [[0, 1j], [1j, 0]])


class FSwap(TwoQubitGateOperation):
    """Fermionic SWAP: exchanges |01> and |10> and signs |11>."""

    _tags = _tags("FSwap")

    def unitary_matrix(self):
        return _outer_inner([[1, 0], [0, -1]], [[0, 1], [1, 0]])


class SqrtISwap(TwoQubitGateOperation):
    _tags = _tags("SqrtISwap")

    def unitary_matrix(self):
        f = _FRAC_1_SQRT_2
        return _outer_inner(np.eye(2), [[f, 1j * f], [1j * f, f]])


class InvSqrtISwap(TwoQubitGateOperation):
    _tags = _tags("InvSqrtISwap")

    def unitary_matrix(self):
        f = _FRAC_1_SQRT_2
        return _outer_inner(np.eye(2), [[f, -1j * f], [-1j * f, f]])


class ControlledPauliY(TwoQubitGateOperation):
    _tags = _tags("ControlledPauliY")

    def unitary_matrix(self):
        return _controlled([[0, -1j], [1j, 0]])


class ControlledPauliZ(TwoQubitGateOperation):
    _tags = _tags("ControlledPauliZ")

    def unitary_matrix(self):
        return np.diag([1, 1, 1, -1]).astype(complex)


class MolmerSorensenXX(TwoQubitGateOperation):
    """Fully entangling Molmer-Sorensen gate exp(-i*pi/4 * X⊗X)."""

    _tags = _tags("MolmerSorensenXX")

    def unitary_matrix(self):
        f = _FRAC_1_SQRT_2
        return _outer_inner([[f, -1j * f], [-1j * f, f]], [[f, -1j * f], [-1j * f, f]])


class EchoCrossResonance(TwoQubitGateOperation):
    """Echoed cross-resonance gate of superconducting devices."""

    _tags = _tags("EchoCrossResonance")
    _min_version = (1, 8, 0)

    def unitary_matrix(self):
        return _FRAC_1_SQRT_2 * np.array(
            [
                [0, 1, 0, 1j],
                [1, 0, -1j, 0],
                [0, 1j, 0, 1],
                [-1j, 0, 1, 0],
            ],
            dtype=complex,
        )


# ============================================================================
# ROTATIONS
# ============================================================================


class XY(Rotate, TwoQubitGateOperation):
    """XY interaction: rotates within {|01>, |10>} by theta/2 with phase i."""

    _fields = TwoQubitGateOperation._fields + (("theta", PARAMETER),)
    _tags = _tags("XY", rotation=True)

    def unitary_matrix(self):
        c = math.cos(float(self.theta) / 2.0)
        s = math.sin(float(self.theta) / 2.0)
        return _outer_inner(np.eye(2), [[c, 1j * s], [1j * s, c]])


class ControlledPhaseShift(Rotate, TwoQubitGateOperation):
    """Phase e^{i*theta} on |11>."""

    _fields = TwoQubitGateOperation._fields + (("theta", PARAMETER),)
    _tags = _tags("ControlledPhaseShift", rotation=True)

    def unitary_matrix(self):
        return np.diag([1, 1, 1, np.exp(1j * float(self.theta))]).astype(complex)


class VariableMSXX(Rotate, TwoQubitGateOperation):
    """Molmer-Sorensen gate with variable angle: exp(-i*theta/2 * X⊗X)."""

    _fields = TwoQubitGateOperation._fields + (("theta", PARAMETER),)
    _tags = _tags("VariableMSXX", rotation=True)

    def unitary_matrix(self):
        c = math.cos(float(self.theta) / 2.0)
        s = math.sin(float(self.theta) / 2.0)
        block = [[c, -1j * s], [-1j * s, c]]
        return _outer_inner(block, block)


class GivensRotation(Rotate, TwoQubitGateOperation):
    """Givens rotation by theta with phase phi, big-endian convention."""

    _fields = TwoQubitGateOperation._fields + (
        ("theta", PARAMETER),
        ("phi", PARAMETER),
    )
    _tags = _tags("GivensRotation", rotation=True)

    def unitary_matrix(self):
        c = math.cos(float(self.theta))
        s = math.sin(float(self.theta))
        phase = np.exp(1j * float(self.phi))
        return _outer_inner(
            [[1, 0], [0, phase]],
            [[c * phase, s], [-s * phase, c]],
        )


class GivensRotationLittleEndian(Rotate, TwoQubitGateOperation):
    """Givens rotation by theta with phase phi, little-endian convention."""

    _fields = TwoQubitGateOperation._fields + (
        ("theta", PARAMETER),
        ("phi", PARAMETER),
    )
    _tags = _tags("GivensRotationLittleEndian", rotation=True)

    def unitary_matrix(self):
        c = math.cos(float(self.theta))
        s = math.sin(float(self.theta))
        phase = np.exp(1j * float(self.phi))
        return _outer_inner(
            [[1, 0], [0, phase]],
            [[c, s], [-s * phase, c * phase]],
        )


class ControlledRotateX(Rotate, TwoQubitGateOperation):
    """RotateX(theta) on the target if the control is |1>."""

    _fields = TwoQubitGateOperation._fields + (("theta", PARAMETER),)
    _tags = _tags("ControlledRotateX")
    _min_version = (1, 3, 0)

    def unitary_matrix(self):
        c = math.cos(float(self.theta) / 2.0)
        s = math.sin(float(self.theta) / 2.0)
        return _controlled([[c, -1j * s], [-1j * s, c]])


class ControlledRotateXY(Rotate, TwoQubitGateOperation):
    """RotateXY(theta, phi) on the target if the control is |1>."""

    _fields = TwoQubitGateOperation._fields + (
        ("theta", PARAMETER),
        ("phi", PARAMETER),
    )
    _tags = _tags("ControlledRotateXY")
    _min_version = (1, 3, 0)

    def unitary_matrix(self):
        c = math.cos(float(self.theta) / 2.0)
        s = math.sin(float(self.theta) / 2.0)
        phase = np.exp(1j * float(self.phi))
        return _controlled([[c, -1j * s * phase.conjugate()], [-1j * s * phase, c]])


# ============================================================================
# INTERACTIONS
# ============================================================================


class SpinInteraction(TwoQubitGateOperation):
    """exp(-i * (x X⊗X + y Y⊗Y + z Z⊗Z))"""

    _fields = TwoQubitGateOperation._fields + (
        ("x", PARAMETER),
        ("y", PARAMETER),
        ("z", PARAMETER),
    )
    _tags = _tags("SpinInteraction")

    def unitary_matrix(self):
        x, y, z = float(self.x), float(self.y), float(self.z)
        outer = np.exp(-1j * z) * np.array(
            [[math.cos(x - y), -1j * math.sin(x - y)],
             [-1j * math.sin(x - y), math.cos(x - y)]]
        )
        inner = np.exp(1j * z) * np.array(
            [[math.cos(x + y), -1j * math.sin(x + y)],
             [-1j * math.sin(x + y), math.cos(x + y)]]
        )
        return _outer_inner(outer, inner)


class Qsim(TwoQubitGateOperation):
    """Qsim gate: SpinInteraction(x, y, z) with |01> and |10> exchanged."""

    _fields = TwoQubitGateOperation._fields + (
        ("x", PARAMETER),
        ("y", PARAMETER),
        ("z", PARAMETER),
    )
    _tags = _tags("Qsim")

    def unitary_matrix(self):
        x, y, z = float(self.x), float(self.y), float(self.z)
        outer = np.exp(-1j * z) * np.array(
            [[math.cos(x - y), -1j * math.sin(x - y)],
             [-1j * math.sin(x - y), math.cos(x - y)]]
        )
        inner = np.exp(1j * z) * np.array(
            [[-1j * math.sin(x + y), math.cos(x + y)],
             [math.cos(x + y), -1j * math.sin(x + y)]]
        )
        return _outer_inner(outer, inner)


class Fsim(TwoQubitGateOperation):
    """Fermionic simulation gate with hopping t, interaction u and delta."""

    _fields = TwoQubitGateOperation._fields + (
        ("t", PARAMETER),
        ("u", PARAMETER),
        ("delta", PARAMETER),
    )
    _tags = _tags("Fsim")

    def unitary_matrix(self):
        t, u, delta = float(self.t), float(self.u), float(self.delta)
        phase = np.exp(-1j * u)
        outer = [
            [math.cos(delta), 1j * math.sin(delta)],
            [-1j * math.sin(delta) * phase, -math.cos(delta) * phase],
        ]
        inner = [
            [-1j * math.sin(t), math.cos(t)],
            [math.cos(t), -1j * math.sin(t)],
        ]
        return _outer_inner(outer, inner)


class Bogoliubov(TwoQubitGateOperation):
    """Bogoliubov transformation with complex pairing delta_real + i*delta_imag."""

    _fields = TwoQubitGateOperation._fields + (
        ("delta_real", PARAMETER),
        ("delta_imag", PARAMETER),
    )
    _tags = _tags("Bogoliubov")

    def unitary_matrix(self):
        delta = complex(float(self.delta_real), float(self.delta_imag))
        magnitude = abs(delta)
        phase = np.exp(1j * math.atan2(delta.imag, delta.real))
        c, s = math.cos(magnitude), math.sin(magnitude)
        return _outer_inner(
            [[c, -1j * s * phase.conjugate()], [-1j * s * phase, c]],
            np.eye(2),
        )


class PMInteraction(TwoQubitGateOperation):
    """exp(-i*t * (σ+σ- + σ-σ+)), exchanging |01> and |10>."""

    _fields = TwoQubitGateOperation._fields + (("t", PARAMETER),)
    _tags = _tags("PMInteraction")

    def unitary_matrix(self):
        c = math.cos(float(self.t))
        s = math.sin(float(self.t))
        return _outer_inner(np.eye(2), [[c, -1j * s], [-1j * s, c]])


class ComplexPMInteraction(TwoQubitGateOperation):
    """PMInteraction with complex coupling t_real + i*t_imag."""

    _fields = TwoQubitGateOperation._fields + (
        ("t_real", PARAMETER),
        ("t_imag", PARAMETER),
    )
    _tags = _tags("ComplexPMInteraction")

    def unitary_matrix(self):
        coupling = complex(float(self.t_real), float(self.t_imag))
        magnitude = abs(coupling)
        phase = np.exp(1j * math.atan2(coupling.imag, coupling.real))
        c, s = math.cos(magnitude), math.sin(magnitude)
        return _outer_inner(
            np.eye(2),
            [[c, -1j * s * phase.conjugate()], [-1j * s * phase, c]],
        )


class PhaseShiftedControlledZ(TwoQubitGateOperation):
    """ControlledPauliZ preceded by single-qubit phase shifts phi on both qubits."""

    _fields = TwoQubitGateOperation._fields + (("phi", PARAMETER),)
    _tags = _tags("PhaseShiftedControlledZ")
    _min_version = (1, 2, 0)

    def unitary_matrix(self):
        phase = np.exp(1j * float(self.phi))
        return np.diag([1, phase, phase, -phase * phase]).astype(complex)


class PhaseShiftedControlledPhase(TwoQubitGateOperation):
    """ControlledPhaseShift(theta) with single-qubit phase shifts phi."""

    _fields = TwoQubitGateOperation._fields + (
        ("theta", PARAMETER),
        ("phi", PARAMETER),
    )
    _tags = _tags("PhaseShiftedControlledPhase")
    _min_version = (1, 2, 0)

    def unitary_matrix(self):
        phase = np.exp(1j * float(self.phi))
        last = np.exp(1j * (2.0 * float(self.phi) + float(self.theta)))
        return np.diag([1, phase, phase, last]).astype(complex)
