"""Contract shared by every operation: tags, qubits, substitution, remapping."""
import copy
import pickle

import numpy as np
import pytest

from qgate import (
    AVAILABLE_GATES_HQSLANG, CNOT, CalculatorError, CallDefinedGate, InvolvedQubits,
    MultiQubitMS, Operation, QubitMappingError, RotateX, SymbolicFloat,
    available_operations, is_unitary, operation_class,
)
from tests.catalogue import ALL_GATES, ALL_OPERATIONS, gate_id


@pytest.mark.parametrize("operation", ALL_OPERATIONS, ids=gate_id)
def test_tags_chain(operation):
    tags = operation.tags()
    assert tags[0] == "Operation"
    assert tags[-1] == operation.hqslang()
    assert operation.hqslang() == type(operation).__name__


@pytest.mark.parametrize("operation", ALL_OPERATIONS, ids=gate_id)
def test_tags_do_not_depend_on_fields(operation):
    mapping = {qubit: qubit + 5 for qubit in operation.qubits}
    remapped = operation.remap_qubits(mapping)
    assert remapped.tags() == operation.tags()


@pytest.mark.parametrize("operation", ALL_GATES, ids=gate_id)
def test_gate_operation_tag(operation):
    assert "GateOperation" in operation.tags()


@pytest.mark.parametrize("operation", ALL_OPERATIONS, ids=gate_id)
def test_involved_qubits(operation):
    assert operation.involved_qubits() == set(operation.qubits)
    assert operation.involved_qubits() == InvolvedQubits.of(operation.qubits)


@pytest.mark.parametrize("operation", ALL_OPERATIONS, ids=gate_id)
def test_remap_round_trip(operation):
    qubits = operation.qubits
    shifted = {qubit: qubit + 10 for qubit in qubits}
    inverse = {new: old for old, new in shifted.items()}
    remapped = operation.remap_qubits(shifted)
    assert remapped.qubits == [qubit + 10 for qubit in qubits]
    assert remapped.remap_qubits(inverse) == operation


@pytest.mark.parametrize("operation", ALL_OPERATIONS, ids=gate_id)
def test_remap_missing_qubit(operation):
    with pytest.raises(QubitMappingError) as info:
        operation.remap_qubits({})
    assert info.value.qubit == operation.qubits[0]


@pytest.mark.parametrize("operation", ALL_GATES, ids=gate_id)
def test_literal_substitution_is_identity(operation):
    assert not operation.is_parametrized()
    assert operation.substitute_parameters({"unused": 1.0}) == operation


@pytest.mark.parametrize("operation", ALL_GATES, ids=gate_id)
def test_unitary(operation):
    matrix = operation.unitary_matrix()
    dimension = 2 ** len(operation.qubits)
    assert matrix.shape == (dimension, dimension)
    assert matrix.dtype == np.complex128
    assert is_unitary(matrix, tolerance=1e-12)


@pytest.mark.parametrize("operation", ALL_OPERATIONS, ids=gate_id)
def test_dict_form_restores_operation(operation):
    data = operation.to_dict()
    assert list(data) == [operation.hqslang()]
    assert Operation.from_dict(data) == operation


@pytest.mark.parametrize("operation", ALL_OPERATIONS, ids=gate_id)
def test_value_semantics(operation):
    assert copy.deepcopy(operation) == operation
    assert pickle.loads(pickle.dumps(operation)) == operation
    assert hash(copy.copy(operation)) == hash(operation)
    with pytest.raises(AttributeError, match="immutable"):
        operation.qubits = [7]


@pytest.mark.parametrize("operation", ALL_OPERATIONS, ids=gate_id)
def test_minimum_supported_version(operation):
    version = operation.minimum_supported_version()
    assert len(version) == 3
    assert version >= (1, 0, 0)


def test_equality_is_structural():
    assert RotateX(0, 0.5) == RotateX(0, 0.5)
    assert RotateX(0, 0.5) != RotateX(1, 0.5)
    assert RotateX(0, "theta") != RotateX(0, 0.5)
    assert RotateX(0, "theta + 1") != RotateX(0, "1 + theta")
    assert CNOT(0, 1) != CNOT(1, 0)


def test_substitution_evaluates_every_parameter():
    gate = MultiQubitMS([0, 1], "2 * theta")
    assert gate.is_parametrized()
    substituted = gate.substitute_parameters({"theta": 0.25})
    assert substituted == MultiQubitMS([0, 1], 0.5)
    assert not substituted.is_parametrized()


def test_substitution_is_atomic():
    gate = CallDefinedGate("g", [0], ["a", "b"])
    with pytest.raises(CalculatorError):
        gate.substitute_parameters({"a": 1.0})
    # The original operation is untouched
    assert gate.free_parameters == [SymbolicFloat("a"), SymbolicFloat("b")]


def test_symbolic_unitary_fails():
    with pytest.raises(CalculatorError):
        RotateX(0, "theta").unitary_matrix()


def test_remap_ignores_unrelated_entries():
    gate = CNOT(0, 1).remap_qubits({0: 2, 1: 3, 7: 8})
    assert gate == CNOT(2, 3)


def test_constructor_arguments():
    assert RotateX(qubit=1, theta=0.5) == RotateX(1, 0.5)
    with pytest.raises(TypeError):
        RotateX(0)
    with pytest.raises(TypeError):
        RotateX(0, 0.5, 1.0)
    with pytest.raises(TypeError):
        CNOT(0.5, 1)
    with pytest.raises(ValueError, match="non-negative"):
        CNOT(-1, 1)


def test_repr():
    assert repr(RotateX(0, "theta")) == "RotateX(qubit=0, theta='theta')"
    assert repr(CallDefinedGate("g", [0, 1], [0.5])) == (
        "CallDefinedGate(gate_name='g', qubits=[0, 1], free_parameters=[0.5])"
    )


def test_registry():
    assert operation_class("RotateX") is RotateX
    assert "CallDefinedGate" in available_operations()
    assert "CallDefinedGate" not in AVAILABLE_GATES_HQSLANG
    assert "TripleControlledPauliZ" in AVAILABLE_GATES_HQSLANG
    assert len(AVAILABLE_GATES_HQSLANG) == len(ALL_GATES) - 1  # two QFT instances
    with pytest.raises(KeyError, match="Unknown operation"):
        operation_class("NotAGate")


def test_abstract_bases_can_not_be_built():
    with pytest.raises(TypeError, match="abstract"):
        Operation()


def test_involved_qubits_constants():
    assert InvolvedQubits.ALL != InvolvedQubits.NONE
    assert InvolvedQubits.ALL != set()
    assert InvolvedQubits.of([]) == set()
    assert repr(InvolvedQubits.of([1])) == "InvolvedQubits.of({1})"
