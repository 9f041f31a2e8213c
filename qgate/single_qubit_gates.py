"""
Single-qubit gates.

Every single-qubit gate can be written in the canonical form

    U = e^{i*global_phase} * [[alpha_r + i*alpha_i, -beta_r + i*beta_i],
                              [beta_r + i*beta_i,    alpha_r - i*alpha_i]]

and exposes the five canonical values as SymbolicFloats, so products of
gates can be formed symbolically (see qgate.algebra.multiply). The
unitary_matrix() of the named gates is written out in closed form.
"""

import math

import numpy as np

from .matrices import single_qubit_unitary
from .operation import PARAMETER, QUBIT, GateOperation, Rotate
from .symbolic import SymbolicFloat

__all__ = [
    "SingleQubitGateOperation", "SingleQubitGate", "Identity",
    "RotateX", "RotateY", "RotateZ", "RotateXY", "RotateAroundSphericalAxis",
    "PhaseShiftState0", "PhaseShiftState1",
    "PauliX", "PauliY", "PauliZ",
    "SqrtPauliX", "InvSqrtPauliX", "SqrtPauliY", "InvSqrtPauliY",
    "SGate", "InvSGate", "TGate", "InvTGate", "Hadamard", "GPi", "GPi2",
]

_ZERO = SymbolicFloat(0.0)
_ONE = SymbolicFloat(1.0)
_FRAC_1_SQRT_2 = 1.0 / math.sqrt(2.0)


def _tags(name, rotation=False):
    tags = ("Operation", "GateOperation", "SingleQubitGateOperation")
    if rotation:
        tags += ("Rotation",)
    return tags + (name,)


def _half_angle(theta):
    half = theta / 2.0
    return half.cos(), half.sin()


class SingleQubitGateOperation(GateOperation, abstract=True):
    """Base class of gates acting on one qubit."""

    _fields = (("qubit", QUBIT),)

    def _canonical(self):
        """(alpha_r, alpha_i, beta_r, beta_i, global_phase) as SymbolicFloats."""
        raise NotImplementedError

    def alpha_r(self):
        return self._canonical()[0]

    def alpha_i(self):
        return self._canonical()[1]

    def beta_r(self):
        return self._canonical()[2]

    def beta_i(self):
        return self._canonical()[3]

    def global_phase(self):
        return self._canonical()[4]

    def to_single_qubit_gate(self):
        """The same gate as a generic SingleQubitGate."""
        return SingleQubitGate(self.qubit, *self._canonical())

    def unitary_matrix(self):
        return single_qubit_unitary(*(float(value) for value in self._canonical()))

    def __mul__(self, other):
        if not isinstance(other, SingleQubitGateOperation):
            return NotImplemented
        from .algebra import multiply
        return multiply(self, other)


class SingleQubitGate(SingleQubitGateOperation):
    """General single-qubit gate given by its canonical parameters.

    Args:
        qubit: The qubit the gate acts on
        alpha_r, alpha_i: Real and imaginary part of the diagonal entry
        beta_r, beta_i: Real and imaginary part of the off-diagonal entry
        global_phase: Global phase of the gate

    Raises (from unitary_matrix):
        UnitaryMatrixError: If alpha and beta are not normalized
    """

    _fields = SingleQubitGateOperation._fields + (
        ("alpha_r", PARAMETER),
        ("alpha_i", PARAMETER),
        ("beta_r", PARAMETER),
        ("beta_i", PARAMETER),
        ("global_phase", PARAMETER),
    )
    _tags = _tags("SingleQubitGate")

    def _canonical(self):
        values = self._values
        return (
            values["alpha_r"], values["alpha_i"],
            values["beta_r"], values["beta_i"],
            values["global_phase"],
        )


class Identity(SingleQubitGateOperation):
    _tags = _tags("Identity")
    _min_version = (1, 7, 0)

    def _canonical(self):
        return (_ONE, _ZERO, _ZERO, _ZERO, _ZERO)

    def unitary_matrix(self):
        return np.eye(2, dtype=complex)


class RotateX(Rotate, SingleQubitGateOperation):
    """Rotation around the X axis: exp(-i * theta/2 * X)."""

    _fields = SingleQubitGateOperation._fields + (("theta", PARAMETER),)
    _tags = _tags("RotateX", rotation=True)

    def _canonical(self):
        c, s = _half_angle(self.theta)
        return (c, _ZERO, _ZERO, -s, _ZERO)

    def unitary_matrix(self):
        c = math.cos(float(self.theta) / 2.0)
        s = math.sin(float(self.theta) / 2.0)
        return np.array([[c, -1j * s], [-1j * s, c]], dtype=complex)


class RotateY(Rotate, SingleQubitGateOperation):
    """Rotation around the Y axis: exp(-i * theta/2 * Y)."""

    _fields = SingleQubitGateOperation._fields + (("theta", PARAMETER),)
    _tags = _tags("RotateY", rotation=True)

    def _canonical(self):
        c, s = _half_angle(self.theta)
        return (c, _ZERO, s, _ZERO, _ZERO)

    def unitary_matrix(self):
        c = math.cos(float(self.theta) / 2.0)
        s = math.sin(float(self.theta) / 2.0)
        return np.array([[c, -s], [s, c]], dtype=complex)


class RotateZ(Rotate, SingleQubitGateOperation):
    """Rotation around the Z axis: exp(-i * theta/2 * Z)."""

    _fields = SingleQubitGateOperation._fields + (("theta", PARAMETER),)
    _tags = _tags("RotateZ", rotation=True)

    def _canonical(self):
        c, s = _half_angle(self.theta)
        return (c, -s, _ZERO, _ZERO, _ZERO)

    def unitary_matrix(self):
        phase = np.exp(0.5j * float(self.theta))
        return np.array([[phase.conjugate(), 0], [0, phase]], dtype=complex)


class RotateXY(Rotate, SingleQubitGateOperation):
    """Rotation by theta around the axis (cos(phi), sin(phi), 0)."""

    _fields = SingleQubitGateOperation._fields + (
        ("theta", PARAMETER),
        ("phi", PARAMETER),
    )
    _tags = _tags("RotateXY", rotation=True)
    _min_version = (1, 3, 0)

    def _canonical(self):
        c, s = _half_angle(self.theta)
        return (c, _ZERO, s * self.phi.sin(), -(s * self.phi.cos()), _ZERO)

    def unitary_matrix(self):
        c = math.cos(float(self.theta) / 2.0)
        s = math.sin(float(self.theta) / 2.0)
        phase = np.exp(1j * float(self.phi))
        return np.array(
            [[c, -1j * s * phase.conjugate()], [-1j * s * phase, c]], dtype=complex
        )


class RotateAroundSphericalAxis(Rotate, SingleQubitGateOperation):
    """Rotation by theta around an axis given in spherical coordinates.

    Args:
        qubit: The qubit the gate acts on
        theta: Rotation angle
        spherical_theta: Polar angle of the rotation axis
        spherical_phi: Azimuthal angle of the rotation axis
    """

    _fields = SingleQubitGateOperation._fields + (
        ("theta", PARAMETER),
        ("spherical_theta", PARAMETER),
        ("spherical_phi", PARAMETER),
    )
    _tags = _tags("RotateAroundSphericalAxis", rotation=True)

    def _canonical(self):
        c, s = _half_angle(self.theta)
        polar = self.spherical_theta
        azimuth = self.spherical_phi
        return (
            c,
            -(s * polar.cos()),
            s * polar.sin() * azimuth.sin(),
            -(s * polar.sin() * azimuth.cos()),
            _ZERO,
        )


class PhaseShiftState0(Rotate, SingleQubitGateOperation):
    """Phase e^{i*theta} on |0>: diag(e^{i*theta}, 1)."""

    _fields = SingleQubitGateOperation._fields + (("theta", PARAMETER),)
    _tags = _tags("PhaseShiftState0", rotation=True)

    def _canonical(self):
        c, s = _half_angle(self.theta)
        return (c, s, _ZERO, _ZERO, self.theta / 2.0)

    def unitary_matrix(self):
        return np.diag([np.exp(1j * float(self.theta)), 1.0]).astype(complex)


class PhaseShiftState1(Rotate, SingleQubitGateOperation):
    """Phase e^{i*theta} on |1>: diag(1, e^{i*theta})."""

    _fields = SingleQubitGateOperation._fields + (("theta", PARAMETER),)
    _tags = _tags("PhaseShiftState1", rotation=True)

    def _canonical(self):
        c, s = _half_angle(self.theta)
        return (c, -s, _ZERO, _ZERO, self.theta / 2.0)

    def unitary_matrix(self):
        return np.diag([1.0, np.exp(1j * float(self.theta))]).astype(complex)


# ============================================================================
# FIXED GATES
# ============================================================================


class PauliX(SingleQubitGateOperation):
    _tags = _tags("PauliX")

    def _canonical(self):
        return (_ZERO, _ZERO, _ZERO, SymbolicFloat(-1.0), SymbolicFloat(math.pi / 2.0))

    def unitary_matrix(self):
        return np.array([[0, 1], [1, 0]], dtype=complex)


class PauliY(SingleQubitGateOperation):
    _tags = _tags("PauliY")

    def _canonical(self):
        return (_ZERO, _ZERO, _ONE, _ZERO, SymbolicFloat(math.pi / 2.0))

    def unitary_matrix(self):
        return np.array([[0, -1j], [1j, 0]], dtype=complex)


class PauliZ(SingleQubitGateOperation):
    _tags = _tags("PauliZ")

    def _canonical(self):
        return (_ZERO, SymbolicFloat(-1.0), _ZERO, _ZERO, SymbolicFloat(math.pi / 2.0))

    def unitary_matrix(self):
        return np.array([[1, 0], [0, -1]], dtype=complex)


class SqrtPauliX(SingleQubitGateOperation):
    """Square root of PauliX, equal to RotateX(pi/2)."""

    _tags = _tags("SqrtPauliX")

    def _canonical(self):
        c = SymbolicFloat(math.cos(math.pi / 4.0))
        return (c, _ZERO, _ZERO, SymbolicFloat(-math.cos(math.pi / 4.0)), _ZERO)

    def unitary_matrix(self):
        c = math.cos(math.pi / 4.0)
        return np.array([[c, -1j * c], [-1j * c, c]], dtype=complex)


class InvSqrtPauliX(SingleQubitGateOperation):
    """Inverse square root of PauliX, equal to RotateX(-pi/2)."""

    _tags = _tags("InvSqrtPauliX")

    def _canonical(self):
        c = SymbolicFloat(math.cos(math.pi / 4.0))
        return (c, _ZERO, _ZERO, SymbolicFloat(math.cos(math.pi / 4.0)), _ZERO)

    def unitary_matrix(self):
        c = math.cos(math.pi / 4.0)
        return np.array([[c, 1j * c], [1j * c, c]], dtype=complex)


class SqrtPauliY(SingleQubitGateOperation):
    """Square root of PauliY, equal to RotateY(pi/2)."""

    _tags = _tags("SqrtPauliY")
    _min_version = (1, 15, 0)

    def _canonical(self):
        c = SymbolicFloat(math.cos(math.pi / 4.0))
        return (c, _ZERO, SymbolicFloat(math.cos(math.pi / 4.0)), _ZERO, _ZERO)

    def unitary_matrix(self):
        c = math.cos(math.pi / 4.0)
        return np.array([[c, -c], [c, c]], dtype=complex)


class InvSqrtPauliY(SingleQubitGateOperation):
    """Inverse square root of PauliY, equal to RotateY(-pi/2)."""

    _tags = _tags("InvSqrtPauliY")
    _min_version = (1, 15, 0)

    def _canonical(self):
        c = SymbolicFloat(math.cos(math.pi / 4.0))
        return (c, _ZERO, SymbolicFloat(-math.cos(math.pi / 4.0)), _ZERO, _ZERO)

    def unitary_matrix(self):
        c = math.cos(math.pi / 4.0)
        return np.array([[c, c], [-c, c]], dtype=complex)


class SGate(SingleQubitGateOperation):
    """diag(1, i)"""

    _tags = _tags("SGate")

    def _canonical(self):
        return (
            SymbolicFloat(_FRAC_1_SQRT_2), SymbolicFloat(-_FRAC_1_SQRT_2),
            _ZERO, _ZERO, SymbolicFloat(math.pi / 4.0),
        )

    def unitary_matrix(self):
        return np.array([[1, 0], [0, 1j]], dtype=complex)


class InvSGate(SingleQubitGateOperation):
    """diag(1, -i)"""

    _tags = _tags("InvSGate")
    _min_version = (1, 15, 0)

    def _canonical(self):
        return (
            SymbolicFloat(_FRAC_1_SQRT_2), SymbolicFloat(_FRAC_1_SQRT_2),
            _ZERO, _ZERO, SymbolicFloat(-math.pi / 4.0),
        )

    def unitary_matrix(self):
        return np.array([[1, 0], [0, -1j]], dtype=complex)


class TGate(SingleQubitGateOperation):
    """diag(1, e^{i*pi/4})"""

    _tags = _tags("TGate")

    def _canonical(self):
        return (
            SymbolicFloat(math.cos(math.pi / 8.0)), SymbolicFloat(-math.sin(math.pi / 8.0)),
            _ZERO, _ZERO, SymbolicFloat(math.pi / 8.0),
        )

    def unitary_matrix(self):
        return np.array([[1, 0], [0, np.exp(0.25j * math.pi)]], dtype=complex)


class InvTGate(SingleQubitGateOperation):
    """diag(1, e^{-i*pi/4})"""

    _tags = _tags("InvTGate")
    _min_version = (1, 15, 0)

    def _canonical(self):
        return (
            SymbolicFloat(math.cos(math.pi / 8.0)), SymbolicFloat(math.sin(math.pi / 8.0)),
            _ZERO, _ZERO, SymbolicFloat(-math.pi / 8.0),
        )

    def unitary_matrix(self):
        return np.array([[1, 0], [0, np.exp(-0.25j * math.pi)]], dtype=complex)


class Hadamard(SingleQubitGateOperation):
    _tags = _tags("Hadamard")

    def _canonical(self):
        return (
            _ZERO, SymbolicFloat(-_FRAC_1_SQRT_2),
            _ZERO, SymbolicFloat(-_FRAC_1_SQRT_2),
            SymbolicFloat(math.pi / 2.0),
        )

    def unitary_matrix(self):
        return _FRAC_1_SQRT_2 * np.array([[1, 1], [1, -1]], dtype=complex)


class GPi(SingleQubitGateOperation):
    """Trapped-ion pi pulse with phase theta: [[0, e^{-i*theta}], [e^{i*theta}, 0]]."""

    _fields = SingleQubitGateOperation._fields + (("theta", PARAMETER),)
    _tags = _tags("GPi")
    _min_version = (1, 4, 0)

    def _canonical(self):
        return (_ZERO, _ZERO, self.theta.sin(), -self.theta.cos(), SymbolicFloat(math.pi / 2.0))

    def unitary_matrix(self):
        phase = np.exp(1j * float(self.theta))
        return np.array([[0, phase.conjugate()], [phase, 0]], dtype=complex)


class GPi2(SingleQubitGateOperation):
    """Trapped-ion pi/2 pulse with phase theta."""

    _fields = SingleQubitGateOperation._fields + (("theta", PARAMETER),)
    _tags = _tags("GPi2")
    _min_version = (1, 4, 0)

    def _canonical(self):
        return (
            SymbolicFloat(_FRAC_1_SQRT_2),
            _ZERO,
            self.theta.sin() * _FRAC_1_SQRT_2,
            -(self.theta.cos() * _FRAC_1_SQRT_2),
            _ZERO,
        )

    def unitary_matrix(self):
        phase = np.exp(1j * float(self.theta))
        return _FRAC_1_SQRT_2 * np.array(
            [[1, -1j * phase.conjugate()], [-1j * phase, 1]], dtype=complex
        )
