"""
Matrix helpers shared by the gate catalogue, the algebra and the tests.

Conventions: complex128 numpy arrays, row-major, and in a register of n
qubits the first listed qubit is the most significant bit of the basis index.
"""

import numpy as np

from .config import get_config
from .errors import UnitaryMatrixError
from .logging_config import get_logger

__all__ = [
    "single_qubit_unitary", "embed_gate_matrix", "circuit_unitary",
    "is_unitary", "bit_reversal_permutation",
]

logger = get_logger(__name__)


def single_qubit_unitary(alpha_r, alpha_i, beta_r, beta_i, global_phase, tolerance=None):
    """Build the matrix of the canonical single-qubit parametrization.

    U = e^{i*global_phase} * [[alpha_r + i*alpha_i, -beta_r + i*beta_i],
                              [beta_r + i*beta_i,    alpha_r - i*alpha_i]]

    Args:
        alpha_r, alpha_i, beta_r, beta_i, global_phase: floats
        tolerance: Allowed deviation of the norm from 1
            (default: config unitary_tolerance)

    Returns:
        2x2 complex numpy array

    Raises:
        UnitaryMatrixError: If alpha_r^2 + alpha_i^2 + beta_r^2 + beta_i^2
            differs from 1 by more than the tolerance
    """
    if tolerance is None:
        tolerance = get_config().unitary_tolerance
    norm = alpha_r ** 2 + alpha_i ** 2 + beta_r ** 2 + beta_i ** 2
    if abs(norm - 1.0) > tolerance:
        logger.debug("Rejecting non-unitary single-qubit parameters with norm %s", norm)
        raise UnitaryMatrixError(alpha_r, alpha_i, beta_r, beta_i, norm)
    matrix = np.array(
        [
            [complex(alpha_r, alpha_i), complex(-beta_r, beta_i)],
            [complex(beta_r, beta_i), complex(alpha_r, -alpha_i)],
        ],
        dtype=complex,
    )
    return np.exp(1j * global_phase) * matrix


def bit_reversal_permutation(number_qubits):
    """Index permutation that reverses the qubit order of a register."""
    dimension = 2 ** number_qubits
    if number_qubits == 0:
        return np.zeros(1, dtype=int)
    return np.array([
        int(format(index, f"0{number_qubits}b")[::-1], 2)
        for index in range(dimension)
    ])


def embed_gate_matrix(matrix, qubits, number_qubits):
    """Lift a gate matrix acting on some qubits into the full register.

    Args:
        matrix: 2^k x 2^k matrix of a gate on k qubits
        qubits: The k register qubits, first one most significant in matrix
        number_qubits: Size n of the register

    Returns:
        2^n x 2^n complex numpy array
    """
    qubits = list(qubits)
    k = len(qubits)
    if matrix.shape != (2 ** k, 2 ** k):
        raise ValueError(f"Matrix of shape {matrix.shape} does not act on {k} qubits")
    if len(set(qubits)) != k:
        raise ValueError(f"Gate qubits {qubits} contain duplicates")
    if any(qubit >= number_qubits for qubit in qubits):
        raise ValueError(f"Gate qubits {qubits} do not fit into {number_qubits} qubits")

    dimension = 2 ** number_qubits
    # Apply the gate to the row axes of the identity
    identity = np.eye(dimension, dtype=complex).reshape([2] * number_qubits + [dimension])
    gate = np.asarray(matrix, dtype=complex).reshape([2] * (2 * k))
    result = np.tensordot(gate, identity, axes=(list(range(k, 2 * k)), qubits))
    result = np.moveaxis(result, list(range(k)), qubits)
    return result.reshape(dimension, dimension)


def circuit_unitary(operations, number_qubits=None):
    """Unitary of a sequence of gate operations applied in order.

    Args:
        operations: Iterable of gate operations
        number_qubits: Register size (default: highest qubit + 1)

    Returns:
        2^n x 2^n complex numpy array
    """
    operations = list(operations)
    if number_qubits is None:
        number_qubits = max(
            (max(operation.qubits) + 1 for operation in operations if operation.qubits),
            default=0,
        )
    unitary = np.eye(2 ** number_qubits, dtype=complex)
    for operation in operations:
        if not hasattr(operation, "unitary_matrix"):
            raise TypeError(f"{operation.hqslang()} has no unitary matrix")
        embedded = embed_gate_matrix(
            operation.unitary_matrix(), operation.qubits, number_qubits
        )
        unitary = embedded @ unitary
    return unitary


def is_unitary(matrix, tolerance=1e-12):
    """Check U^dagger U = 1 elementwise within tolerance."""
    matrix = np.asarray(matrix)
    if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]:
        return False
    identity = np.eye(matrix.shape[0])
    return bool(np.allclose(matrix.conj().T @ matrix, identity, rtol=0, atol=tolerance))
