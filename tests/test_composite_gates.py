"""Decompositions of three-, four- and multi-qubit gates into small gates."""
import math

import numpy as np
import pytest

from qgate import (
    CNOT, QFT, SWAP, CallDefinedGate, Circuit, ControlledControlledPauliZ,
    ControlledControlledPhaseShift, ControlledPhaseShift, ControlledSWAP, Hadamard,
    MolmerSorensenXX, MultiQubitCNOT, MultiQubitMS, MultiQubitZZ, PauliX,
    PhaseShiftState1, PhaseShiftedControlledControlledPhase, RotateZ, SymbolicFloat,
    TGate, Toffoli, TripleControlledPauliX, TripleControlledPhaseShift, circuit_unitary,
)
from qgate.matrices import bit_reversal_permutation
from tests.catalogue import COMPOSITE_GATES, gate_id

DECOMPOSABLE = [
    gate for gate in COMPOSITE_GATES
    if not (isinstance(gate, QFT) and gate.inverse)
]


def assert_matrix(actual, expected):
    np.testing.assert_allclose(actual, np.asarray(expected, dtype=complex), atol=1e-12)


@pytest.mark.parametrize("gate", DECOMPOSABLE, ids=gate_id)
def test_circuit_reproduces_unitary(gate):
    circuit = gate.circuit()
    assert isinstance(circuit, Circuit)
    assert_matrix(circuit.unitary_matrix(len(gate.qubits)), gate.unitary_matrix())


@pytest.mark.parametrize("gate", COMPOSITE_GATES, ids=gate_id)
def test_circuit_uses_small_gates(gate):
    for operation in gate.circuit():
        assert len(operation.qubits) <= 2
        assert set(operation.qubits) <= set(gate.qubits)


@pytest.mark.parametrize("gate", COMPOSITE_GATES, ids=gate_id)
def test_circuit_follows_remapping(gate):
    mapping = {qubit: 3 * qubit + 1 for qubit in gate.qubits}
    assert gate.remap_qubits(mapping).circuit() == gate.circuit().remap_qubits(mapping)


def test_controlled_controlled_pauli_z_ladder():
    circuit = ControlledControlledPauliZ(0, 1, 2).circuit()
    assert len(circuit) == 13
    assert circuit[0] == CNOT(1, 2)
    assert circuit[1] == PhaseShiftState1(2, -math.pi / 4)
    assert circuit[3] == TGate(2)
    assert circuit[-1] == CNOT(0, 1)


def test_toffoli_ladder():
    circuit = Toffoli(0, 1, 2).circuit()
    assert len(circuit) == 15
    assert circuit[0] == Hadamard(2)
    assert circuit[10] == Hadamard(2)
    assert sum(isinstance(operation, CNOT) for operation in circuit) == 6


def test_symbolic_controlled_controlled_phase():
    gate = ControlledControlledPhaseShift(0, 1, 2, "theta")
    circuit = gate.circuit()
    assert circuit.is_parametrized()
    assert circuit[1] == PhaseShiftState1(2, "(-(theta / 4.0))")
    bound = circuit.substitute_parameters({"theta": 0.7})
    assert_matrix(
        bound.unitary_matrix(3),
        ControlledControlledPhaseShift(0, 1, 2, 0.7).unitary_matrix(),
    )


def test_symbolic_phase_shifted_controlled_controlled_phase():
    gate = PhaseShiftedControlledControlledPhase(0, 1, 2, "theta", "phi")
    bindings = {"theta": 0.4, "phi": -1.1}
    assert_matrix(
        gate.circuit().substitute_parameters(bindings).unitary_matrix(3),
        gate.substitute_parameters(bindings).unitary_matrix(),
    )


def test_controlled_swap_circuit():
    circuit = ControlledSWAP(0, 1, 2).circuit()
    assert circuit[0] == CNOT(2, 1)
    assert circuit[-1] == CNOT(2, 1)
    matrix = ControlledSWAP(0, 1, 2).unitary_matrix()
    # |101> <-> |110>
    assert matrix[5, 6] == 1
    assert matrix[6, 5] == 1


def test_gates_on_scattered_qubits():
    gate = Toffoli(4, 0, 2)
    circuit = gate.circuit()
    expected = Toffoli(0, 1, 2).circuit().remap_qubits({0: 4, 1: 0, 2: 2})
    assert circuit == expected
    assert circuit.involved_qubits() == {0, 2, 4}


def test_triple_controlled_network_size():
    circuit = TripleControlledPauliX(0, 1, 2, 3).circuit()
    # 15 phases and 14 CNOTs between the two Hadamards
    assert len(circuit) == 31
    assert circuit[0] == Hadamard(3)
    assert circuit[-1] == Hadamard(3)


def test_triple_controlled_phase_symbolic():
    gate = TripleControlledPhaseShift(0, 1, 2, 3, "theta")
    bound = gate.circuit().substitute_parameters({"theta": 1.3})
    assert_matrix(
        bound.unitary_matrix(4),
        TripleControlledPhaseShift(0, 1, 2, 3, 1.3).unitary_matrix(),
    )


def test_four_qubit_tags():
    tags = TripleControlledPhaseShift(0, 1, 2, 3, 0.1).tags()
    assert tags == [
        "Operation", "GateOperation", "MultiQubitGateOperation", "Rotation",
        "TripleControlledPhaseShift",
    ]
    assert TripleControlledPauliX(0, 1, 2, 3).minimum_supported_version() == (1, 15, 0)


# ============================================================================
# MULTI-QUBIT GATES
# ============================================================================


def test_multi_qubit_ms_circuit():
    gate = MultiQubitMS([0, 1], math.pi / 2)
    assert list(gate.circuit()) == [
        Hadamard(0), Hadamard(1), CNOT(0, 1), RotateZ(1, math.pi / 2),
        CNOT(0, 1), Hadamard(0), Hadamard(1),
    ]
    assert_matrix(gate.circuit().unitary_matrix(2), gate.unitary_matrix())


def test_multi_qubit_ms_two_qubits_matches_molmer_sorensen():
    assert_matrix(
        MultiQubitMS([0, 1], math.pi / 2).unitary_matrix(),
        MolmerSorensenXX(0, 1).unitary_matrix(),
    )


def test_multi_qubit_zz_circuit():
    gate = MultiQubitZZ([0, 1, 2], 0.4)
    assert list(gate.circuit()) == [
        CNOT(0, 1), CNOT(1, 2), RotateZ(2, 0.4), CNOT(1, 2), CNOT(0, 1),
    ]
    diagonal = np.diag(gate.unitary_matrix())
    assert diagonal[0] == pytest.approx(np.exp(-0.2j))
    assert diagonal[1] == pytest.approx(np.exp(0.2j))


def test_multi_qubit_cnot_small_registers():
    assert list(MultiQubitCNOT([3]).circuit()) == [PauliX(3)]
    assert list(MultiQubitCNOT([0, 1]).circuit()) == [CNOT(0, 1)]
    assert MultiQubitCNOT([0, 1, 2]).circuit() == Toffoli(0, 1, 2).circuit()
    assert_matrix(MultiQubitCNOT([0]).unitary_matrix(), [[0, 1], [1, 0]])
    assert_matrix(MultiQubitCNOT([0, 1]).unitary_matrix(), CNOT(0, 1).unitary_matrix())


@pytest.mark.parametrize("number_qubits", [4, 5])
def test_multi_qubit_cnot_large_registers(number_qubits):
    gate = MultiQubitCNOT(list(range(number_qubits)))
    assert_matrix(gate.circuit().unitary_matrix(number_qubits), gate.unitary_matrix())


@pytest.mark.parametrize("number_qubits", [2, 3, 4])
def test_multi_qubit_cnot_flips_only_the_last_two_states(number_qubits):
    gate = MultiQubitCNOT(list(range(number_qubits)))
    matrix = gate.unitary_matrix()
    circuit_matrix = gate.circuit().unitary_matrix(number_qubits)
    dimension = 2 ** number_qubits
    for basis in range(dimension):
        if basis == dimension - 2:
            expected = dimension - 1
        elif basis == dimension - 1:
            expected = dimension - 2
        else:
            expected = basis
        state = np.zeros(dimension, dtype=complex)
        state[basis] = 1.0
        target = np.zeros(dimension, dtype=complex)
        target[expected] = 1.0
        assert_matrix(matrix @ state, target)
        assert_matrix(circuit_matrix @ state, target)


def test_multi_qubit_cnot_matches_triple_controlled_x():
    assert_matrix(
        MultiQubitCNOT([0, 1, 2, 3]).unitary_matrix(),
        TripleControlledPauliX(0, 1, 2, 3).unitary_matrix(),
    )


def test_multi_qubit_cnot_without_qubits():
    gate = MultiQubitCNOT([])
    with pytest.raises(ValueError):
        gate.unitary_matrix()
    with pytest.raises(ValueError):
        gate.circuit()


# ============================================================================
# QUANTUM FOURIER TRANSFORM
# ============================================================================


def reversal_matrix(number_qubits):
    return np.eye(2 ** number_qubits)[bit_reversal_permutation(number_qubits)]


def test_qft_single_qubit_is_hadamard():
    gate = QFT([0], True, False)
    assert list(gate.circuit()) == [Hadamard(0)]
    assert_matrix(gate.unitary_matrix(), Hadamard(0).unitary_matrix())


def test_qft_two_qubit_circuits():
    assert list(QFT([0, 1], True, False).circuit()) == [
        Hadamard(0), ControlledPhaseShift(1, 0, math.pi / 2), Hadamard(1), SWAP(0, 1),
    ]
    assert list(QFT([0, 1], True, True).circuit()) == [
        SWAP(0, 1), Hadamard(0), ControlledPhaseShift(1, 0, -math.pi / 2), Hadamard(1),
    ]
    assert list(QFT([0, 1], False, False).circuit()) == [
        Hadamard(0), ControlledPhaseShift(1, 0, math.pi / 2), Hadamard(1),
    ]


def test_qft_three_qubit_angles():
    angles = [
        float(operation.theta)
        for operation in QFT([0, 1, 2], False, False).circuit()
        if isinstance(operation, ControlledPhaseShift)
    ]
    assert angles == [math.pi / 2, math.pi / 4, math.pi / 2]


def test_qft_matrix_is_fourier_transform():
    matrix = QFT([0, 1], True, False).unitary_matrix()
    assert_matrix(matrix, 0.5 * np.array([
        [1, 1, 1, 1],
        [1, 1j, -1, -1j],
        [1, -1, 1, -1],
        [1, -1j, -1, 1j],
    ]))


@pytest.mark.parametrize("swaps", [True, False])
@pytest.mark.parametrize("number_qubits", [1, 2, 3])
def test_qft_inverse(swaps, number_qubits):
    qubits = list(range(number_qubits))
    forward = QFT(qubits, swaps, False)
    inverse = QFT(qubits, swaps, True)
    assert_matrix(inverse.unitary_matrix() @ forward.unitary_matrix(), np.eye(2 ** number_qubits))
    assert_matrix(
        forward.circuit().unitary_matrix(number_qubits), forward.unitary_matrix()
    )
    # The inverse ladder acts on the bit-reversed register
    reversal = reversal_matrix(number_qubits)
    assert_matrix(
        inverse.circuit().unitary_matrix(number_qubits),
        reversal @ inverse.unitary_matrix() @ reversal,
    )


def test_qft_without_swaps_reverses_rows():
    gate = QFT([0, 1, 2], False, False)
    assert_matrix(
        gate.unitary_matrix(),
        reversal_matrix(3) @ QFT([0, 1, 2], True, False).unitary_matrix(),
    )


def test_qft_flags():
    gate = QFT([2, 0], 1, 0)
    assert gate.swaps is True
    assert gate.inverse is False
    assert gate.qubits == [2, 0]
    assert not gate.is_parametrized()


# ============================================================================
# DEFINED GATE CALLS
# ============================================================================


def test_call_defined_gate_fields():
    gate = CallDefinedGate("my_gate", [2, 0], [0.6, "theta"])
    assert gate.gate_name == "my_gate"
    assert gate.qubits == [2, 0]
    assert gate.free_parameters == [SymbolicFloat(0.6), SymbolicFloat("theta")]
    assert gate.involved_qubits() == {0, 2}
    assert gate.is_parametrized()
    assert gate.tags() == ["Operation", "MultiQubitGateOperation", "CallDefinedGate"]
    assert gate.minimum_supported_version() == (1, 13, 0)


def test_call_defined_gate_transformations():
    gate = CallDefinedGate("my_gate", [2, 0], [0.6, "2 * theta"])
    substituted = gate.substitute_parameters({"theta": 0.5})
    assert substituted == CallDefinedGate("my_gate", [2, 0], [0.6, 1.0])
    assert gate.remap_qubits({2: 5, 0: 1}).qubits == [5, 1]
    assert gate != CallDefinedGate("other_gate", [2, 0], [0.6, "2 * theta"])


def test_call_defined_gate_has_no_matrix():
    gate = CallDefinedGate("my_gate", [0], [])
    assert not hasattr(gate, "unitary_matrix")
    with pytest.raises(TypeError, match="no unitary matrix"):
        circuit_unitary([gate], 1)
    with pytest.raises(TypeError):
        CallDefinedGate(3, [0], [])
