"""
Ordered container of operations.

Decompositions of composite gates are returned as a Circuit. Only the
operations needed by the gate algebra are provided: appending, iteration
and the same substitute/remap transformations operations have.
"""

from .matrices import circuit_unitary
from .operation import InvolvedQubits, Operation
from .symbolic import as_calculator

__all__ = ["Circuit"]


class Circuit:
    """Sequence of operations applied in order.

    Args:
        operations: Optional iterable of operations

    Example:
        >>> circuit = Circuit()
        >>> circuit += Hadamard(0)
        >>> circuit += CNOT(0, 1)
        >>> len(circuit)
        2
    """

    def __init__(self, operations=()):
        self._operations = []
        for operation in operations:
            self.add(operation)

    def add(self, operation):
        """Append one operation and return the circuit."""
        if not isinstance(operation, Operation):
            raise TypeError(f"Cannot add {type(operation)} to a Circuit")
        self._operations.append(operation)
        return self

    def __iadd__(self, other):
        if isinstance(other, Operation):
            return self.add(other)
        if isinstance(other, (Circuit, list, tuple)):
            for operation in other:
                self.add(operation)
            return self
        return NotImplemented

    def __add__(self, other):
        if not isinstance(other, (Operation, Circuit, list, tuple)):
            return NotImplemented
        result = Circuit(self._operations)
        result += other
        return result

    def __iter__(self):
        return iter(self._operations)

    def __len__(self):
        return len(self._operations)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return Circuit(self._operations[index])
        return self._operations[index]

    def __eq__(self, other):
        if not isinstance(other, Circuit):
            return NotImplemented
        return self._operations == other._operations

    __hash__ = None

    def __repr__(self):
        body = ", ".join(repr(operation) for operation in self._operations)
        return f"Circuit([{body}])"

    def is_parametrized(self):
        return any(operation.is_parametrized() for operation in self._operations)

    def involved_qubits(self):
        qubits = set()
        for operation in self._operations:
            involved = operation.involved_qubits()
            if involved.kind == "All":
                return InvolvedQubits.ALL
            qubits |= involved.qubits
        if not qubits:
            return InvolvedQubits.NONE
        return InvolvedQubits.of(qubits)

    def number_of_qubits(self):
        """Highest involved qubit index + 1 (0 for an empty circuit)."""
        involved = self.involved_qubits()
        if involved.kind != "Set":
            return 0
        return max(involved.qubits) + 1

    def substitute_parameters(self, bindings):
        """New circuit with every operation's parameters substituted."""
        calculator = as_calculator(bindings)
        return Circuit(
            operation.substitute_parameters(calculator) for operation in self._operations
        )

    def remap_qubits(self, mapping):
        """New circuit with every operation's qubits remapped."""
        return Circuit(operation.remap_qubits(mapping) for operation in self._operations)

    def unitary_matrix(self, number_qubits=None):
        """Unitary of the whole circuit on number_qubits qubits.

        Args:
            number_qubits: Register size (default: number_of_qubits())
        """
        if number_qubits is None:
            number_qubits = self.number_of_qubits()
        return circuit_unitary(self._operations, number_qubits)
