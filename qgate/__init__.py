"""
qgate: Quantum gates as values

A catalogue of immutable quantum gate operations with symbolic parameters.
Gates know their unitary matrix, can substitute parameters and remap
qubits, and composite gates decompose into circuits of simpler gates.
"""

__version__ = "0.1.0"
__license__ = "Apache-2.0"

from .errors import (
    QgateError, CalculatorError, FloatSymbolicNotConvertable,
    UnitaryMatrixError, QubitMappingError, MultiplicationIncompatibleQubits,
)
from .config import QgateConfig, DEFAULT_CONFIG, get_config, set_config
from .logging_config import setup_logging, get_logger
from .symbolic import SymbolicFloat, Calculator
from .operation import (
    InvolvedQubits, Operation, GateOperation, Rotate,
    operation_class, available_operations,
)
from .circuit import Circuit
from .matrices import (
    single_qubit_unitary, embed_gate_matrix, circuit_unitary, is_unitary,
)
from .single_qubit_gates import *
from .two_qubit_gates import *
from .three_qubit_gates import *
from .four_qubit_gates import *
from .multi_qubit_gates import *
from .algebra import multiply, power

from . import single_qubit_gates, two_qubit_gates, three_qubit_gates
from . import four_qubit_gates, multi_qubit_gates

# Names of every gate operation (CallDefinedGate is an operation, not a gate)
AVAILABLE_GATES_HQSLANG = [
    name for name in available_operations()
    if issubclass(operation_class(name), GateOperation)
]

# Explicitly list main exports for clarity
__all__ = [
    # Errors
    'QgateError', 'CalculatorError', 'FloatSymbolicNotConvertable',
    'UnitaryMatrixError', 'QubitMappingError', 'MultiplicationIncompatibleQubits',

    # Configuration and logging
    'QgateConfig', 'DEFAULT_CONFIG', 'get_config', 'set_config',
    'setup_logging', 'get_logger',

    # Symbolic parameters
    'SymbolicFloat', 'Calculator',

    # Operation machinery
    'InvolvedQubits', 'Operation', 'GateOperation', 'Rotate',
    'operation_class', 'available_operations', 'AVAILABLE_GATES_HQSLANG',
    'Circuit',

    # Matrices and algebra
    'single_qubit_unitary', 'embed_gate_matrix', 'circuit_unitary', 'is_unitary',
    'multiply', 'power',
]
__all__ += single_qubit_gates.__all__
__all__ += two_qubit_gates.__all__
__all__ += three_qubit_gates.__all__
__all__ += four_qubit_gates.__all__
__all__ += multi_qubit_gates.__all__
