"""
Operation base classes.

Every gate is an immutable value described by a small table on its class:

    _fields       ordered (name, kind) pairs, e.g. (("control", QUBIT),
                  ("target", QUBIT), ("theta", PARAMETER))
    _tags         the fixed classification chain, "Operation" ... class name
    _min_version  minimum supported version marker

From that table Operation derives the constructor, read-only field
properties, equality, hashing, parameter substitution, qubit remapping,
involved qubits and the dict form used by serializers. Concrete classes only
add what is specific to them: the unitary matrix and, for composite gates,
the decomposition circuit.
"""

import inspect
import operator
from collections.abc import Mapping

from .errors import QubitMappingError
from .symbolic import SymbolicFloat, as_calculator

__all__ = [
    "QUBIT", "QUBITS", "PARAMETER", "PARAMETERS", "FLAG", "NAME",
    "InvolvedQubits", "Operation", "GateOperation", "Rotate",
    "operation_class", "available_operations",
]

# Field kinds
QUBIT = "qubit"
QUBITS = "qubits"
PARAMETER = "parameter"
PARAMETERS = "parameters"
FLAG = "flag"
NAME = "name"

_REGISTRY = {}


def operation_class(hqslang):
    """Return the operation class registered under an hqslang name.

    Raises:
        KeyError: If no operation has that name
    """
    try:
        return _REGISTRY[hqslang]
    except KeyError:
        raise KeyError(f"Unknown operation {hqslang!r}") from None


def available_operations():
    """Names of all registered operations, in definition order."""
    return list(_REGISTRY)


# ============================================================================
# INVOLVED QUBITS
# ============================================================================


class InvolvedQubits:
    """The qubits an operation touches: all of them, none, or a set.

    Use the InvolvedQubits.ALL and InvolvedQubits.NONE constants or
    InvolvedQubits.of(iterable). A set-valued instance also compares equal
    to a plain set with the same members.
    """

    __slots__ = ("kind", "qubits")

    def __init__(self, kind, qubits=()):
        if kind not in ("All", "None", "Set"):
            raise ValueError(f"Unknown InvolvedQubits kind {kind!r}")
        self.kind = kind
        self.qubits = frozenset(qubits)

    @classmethod
    def of(cls, qubits):
        return cls("Set", qubits)

    def __eq__(self, other):
        if isinstance(other, InvolvedQubits):
            return self.kind == other.kind and self.qubits == other.qubits
        if isinstance(other, (set, frozenset)):
            return self.kind == "Set" and self.qubits == other
        return NotImplemented

    def __hash__(self):
        return hash((self.kind, self.qubits))

    def __repr__(self):
        if self.kind == "All":
            return "InvolvedQubits.ALL"
        if self.kind == "None":
            return "InvolvedQubits.NONE"
        return f"InvolvedQubits.of({set(self.qubits) or '{}'})"


InvolvedQubits.ALL = InvolvedQubits("All")
InvolvedQubits.NONE = InvolvedQubits("None")


# ============================================================================
# FIELD HANDLING
# ============================================================================


def _qubit(value):
    qubit = operator.index(value)
    if qubit < 0:
        raise ValueError(f"Qubit indices must be non-negative, got {qubit}")
    return qubit


def _normalize(kind, value):
    """Convert a constructor argument to the stored form of its field kind."""
    if kind == QUBIT:
        return _qubit(value)
    if kind == QUBITS:
        if isinstance(value, (str, bytes)):
            raise TypeError(f"Expected a list of qubits, got {type(value)}")
        return tuple(_qubit(qubit) for qubit in value)
    if kind == PARAMETER:
        return SymbolicFloat(value)
    if kind == PARAMETERS:
        if isinstance(value, (str, bytes)):
            raise TypeError(f"Expected a list of parameters, got {type(value)}")
        return tuple(SymbolicFloat(parameter) for parameter in value)
    if kind == FLAG:
        return bool(value)
    if kind == NAME:
        if not isinstance(value, str):
            raise TypeError(f"Expected a str, got {type(value)}")
        return value
    raise ValueError(f"Unknown field kind {kind!r}")


def _field_property(name, kind):
    if kind in (QUBITS, PARAMETERS):
        def getter(self):
            return list(self._values[name])
    else:
        def getter(self):
            return self._values[name]
    getter.__name__ = name
    return property(getter, doc=f"The {name} of the operation ({kind}).")


def _serialize(kind, value):
    if kind == PARAMETER:
        return value.to_dict()
    if kind == PARAMETERS:
        return [parameter.to_dict() for parameter in value]
    if kind == QUBITS:
        return list(value)
    return value


def _deserialize(kind, value):
    if kind == PARAMETER and isinstance(value, Mapping):
        return SymbolicFloat.from_dict(value)
    if kind == PARAMETERS:
        return [
            SymbolicFloat.from_dict(item) if isinstance(item, Mapping) else item
            for item in value
        ]
    return value


def _format_field(kind, value):
    if kind == PARAMETER:
        return repr(value.value)
    if kind == PARAMETERS:
        return repr([parameter.value for parameter in value])
    if kind == QUBITS:
        return repr(list(value))
    return repr(value)


# ============================================================================
# OPERATION
# ============================================================================


class Operation:
    """Base class of all operations.

    Subclasses declare _fields, _tags and optionally _min_version; pass
    abstract=True in the class statement for intermediate base classes.
    """

    _fields = ()
    _tags = ()
    _min_version = (1, 0, 0)
    _abstract = True
    _signature = inspect.Signature()

    def __init_subclass__(cls, abstract=False, **kwargs):
        super().__init_subclass__(**kwargs)
        cls._abstract = abstract
        for name, kind in cls._fields:
            # Accessor methods of the same name (alpha_r() ...) take precedence
            if inspect.isfunction(inspect.getattr_static(cls, name, None)):
                continue
            setattr(cls, name, _field_property(name, kind))
        cls._signature = inspect.Signature([
            inspect.Parameter(name, inspect.Parameter.POSITIONAL_OR_KEYWORD)
            for name, _ in cls._fields
        ])
        if not abstract:
            _REGISTRY[cls.__name__] = cls

    def __init__(self, *args, **kwargs):
        cls = type(self)
        if cls._abstract:
            raise TypeError(f"Cannot instantiate abstract operation {cls.__name__}")
        try:
            bound = cls._signature.bind(*args, **kwargs)
        except TypeError as err:
            raise TypeError(f"{cls.__name__}{cls._signature}: {err}") from None
        values = {
            name: _normalize(kind, bound.arguments[name])
            for name, kind in cls._fields
        }
        object.__setattr__(self, "_values", values)

    def _replace(self, changes):
        """New instance of the same class with some stored fields changed."""
        values = dict(self._values)
        values.update(changes)
        new = object.__new__(type(self))
        object.__setattr__(new, "_values", values)
        return new

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} is immutable")

    # ------------------------------------------------------------------
    # Classification
    # ------------------------------------------------------------------

    def hqslang(self):
        """Canonical name of the operation."""
        return type(self).__name__

    def tags(self):
        """Classification chain from 'Operation' down to the concrete name."""
        return list(self._tags)

    def minimum_supported_version(self):
        """(major, minor, patch) of the first release that knows this operation."""
        return self._min_version

    # ------------------------------------------------------------------
    # Parameters and qubits
    # ------------------------------------------------------------------

    def _parameters(self):
        for name, kind in self._fields:
            if kind == PARAMETER:
                yield self._values[name]
            elif kind == PARAMETERS:
                yield from self._values[name]

    @property
    def qubits(self):
        """Qubits in the order of the unitary's tensor factors (first = MSB)."""
        qubits = []
        for name, kind in self._fields:
            if kind == QUBIT:
                qubits.append(self._values[name])
            elif kind == QUBITS:
                qubits.extend(self._values[name])
        return qubits

    def is_parametrized(self):
        """True if any parameter is a symbolic expression."""
        return any(parameter.is_parametrized() for parameter in self._parameters())

    def involved_qubits(self):
        return InvolvedQubits.of(self.qubits)

    def substitute_parameters(self, bindings):
        """Replace every parameter by its value under the given bindings.

        Args:
            bindings: dict mapping variable names to floats, or a Calculator

        Returns:
            New operation of the same class with literal parameters

        Raises:
            CalculatorError: If any parameter can not be evaluated; no
                partially substituted operation is produced
        """
        calculator = as_calculator(bindings)
        changes = {}
        for name, kind in self._fields:
            if kind == PARAMETER:
                changes[name] = self._values[name].substitute(calculator)
            elif kind == PARAMETERS:
                changes[name] = tuple(
                    parameter.substitute(calculator)
                    for parameter in self._values[name]
                )
        return self._replace(changes)

    def remap_qubits(self, mapping):
        """Replace every qubit q by mapping[q].

        Args:
            mapping: dict from old to new qubit indices; entries for qubits
                the operation does not use are ignored

        Returns:
            New operation of the same class

        Raises:
            QubitMappingError: For the first qubit missing from mapping
        """

        def lookup(qubit):
            try:
                return _qubit(mapping[qubit])
            except KeyError:
                raise QubitMappingError(qubit) from None

        changes = {}
        for name, kind in self._fields:
            if kind == QUBIT:
                changes[name] = lookup(self._values[name])
            elif kind == QUBITS:
                changes[name] = tuple(lookup(qubit) for qubit in self._values[name])
        return self._replace(changes)

    # ------------------------------------------------------------------
    # Value semantics
    # ------------------------------------------------------------------

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return self._values == other._values

    def __hash__(self):
        return hash((type(self).__name__,) + tuple(
            self._values[name] for name, _ in self._fields
        ))

    def __repr__(self):
        fields = ", ".join(
            f"{name}={_format_field(kind, self._values[name])}"
            for name, kind in self._fields
        )
        return f"{type(self).__name__}({fields})"

    def __reduce__(self):
        return (type(self), tuple(self._values[name] for name, _ in self._fields))

    def to_dict(self):
        """Tagged record {hqslang: {field: value}} for serializers."""
        return {
            self.hqslang(): {
                name: _serialize(kind, self._values[name])
                for name, kind in self._fields
            }
        }

    @classmethod
    def from_dict(cls, data):
        """Rebuild an operation from the output of to_dict().

        Raises:
            KeyError: If the record names an unknown operation or lacks a field
            TypeError: If called on a subclass the record does not belong to
        """
        if len(data) != 1:
            raise ValueError(f"Expected a single tagged record, got {list(data)}")
        ((hqslang, fields),) = data.items()
        operation_cls = operation_class(hqslang)
        if not issubclass(operation_cls, cls):
            raise TypeError(f"{hqslang} is not a {cls.__name__}")
        return operation_cls(**{
            name: _deserialize(kind, fields[name])
            for name, kind in operation_cls._fields
        })


class GateOperation(Operation, abstract=True):
    """Operation with a unitary matrix."""

    def unitary_matrix(self):
        """Unitary matrix as a complex numpy array (first qubit most significant).

        Raises:
            FloatSymbolicNotConvertable: If a parameter is still symbolic
        """
        raise NotImplementedError(f"{self.hqslang()} does not define a unitary matrix")


class Rotate:
    """Mixin for gates whose angle theta generates a one-parameter subgroup."""

    def powercf(self, power):
        """Return the gate raised to a power: theta becomes power * theta."""
        return self._replace({"theta": SymbolicFloat(power) * self._values["theta"]})
