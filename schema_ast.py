"""
schema_ast.py
Immutable AST produced by the Ludwieg schema parser: a Document made of Packages,
which hold id declarations, fields, arrays and (possibly nested) structs.
Comments are not kept.
"""
from enum import Enum
from typing import Iterator, Optional, Tuple, Union


class TypeSource(Enum):
    NATIVE = "native"
    USER = "user"


class Attribute(Enum):
    # The field is kept on the wire but should not be exposed to end users
    DEPRECATED = "deprecated"


# Try-order of the native keywords. None of them is a prefix of another one;
# keep it that way (or keep longer keywords first) when adding new ones.
NATIVE_TYPES = (
    "dynint", "uint8", "uint32", "uint64", "byte", "double",
    "string", "blob", "bool", "uuid", "array", "any",
)


class _Node:
    """
    Base for all AST nodes. Subclasses list their structural fields in
    `_fields`; those take part in equality, hashing and repr. `line` is
    informational only.
    """
    _fields: Tuple[str, ...] = ()
    object_type = "?"

    def __init__(self, line: Optional[int] = None, **values):
        for name in self._fields:
            object.__setattr__(self, name, values[name])
        object.__setattr__(self, 'line', line)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def _key(self):
        return tuple(getattr(self, name) for name in self._fields)

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self._key() == other._key()

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self):
        return hash((type(self).__name__,) + self._key())

    def __repr__(self):
        args = ", ".join(f"{name}={getattr(self, name)!r}" for name in self._fields)
        return f"{type(self).__name__}({args})"


class IdDeclaration(_Node):
    _fields = ("value",)
    object_type = "identifier"

    def __init__(self, value: str, line: Optional[int] = None):
        super().__init__(line, value=value)


class Field(_Node):
    """A single-value declaration such as `uint8 count` or `@point origin !deprecated`."""
    _fields = ("source", "kind", "name", "attributes")
    object_type = "field"

    def __init__(self, source: TypeSource, kind: str, name: str,
                 attributes: Optional[Tuple[Attribute, ...]] = None, line: Optional[int] = None):
        # None means "no attribute list written", never an empty tuple
        if attributes is not None:
            attributes = tuple(attributes) or None
        super().__init__(line, source=source, kind=kind, name=name, attributes=attributes)

    def has_attribute(self, attribute: Attribute) -> bool:
        return attribute in (self.attributes or ())


class ArrayField(Field):
    """An array declaration. `size` is "*" (dynamic), a digit string, or "" when left empty."""
    _fields = ("source", "kind", "name", "size", "attributes")
    object_type = "array"

    def __init__(self, source: TypeSource, kind: str, name: str, size: str,
                 attributes: Optional[Tuple[Attribute, ...]] = None, line: Optional[int] = None):
        if attributes is not None:
            attributes = tuple(attributes) or None
        _Node.__init__(self, line, source=source, kind=kind, name=name, size=size, attributes=attributes)


class Struct(_Node):
    _fields = ("name", "contents")
    object_type = "struct"

    def __init__(self, name: str, contents=(), line: Optional[int] = None):
        super().__init__(line, name=name, contents=tuple(contents))


class Package(_Node):
    _fields = ("name", "contents")
    object_type = "package"

    def __init__(self, name: str, contents=(), line: Optional[int] = None):
        super().__init__(line, name=name, contents=tuple(contents))


StructMember = Union[Field, ArrayField, Struct]
PackageMember = Union[IdDeclaration, Field, ArrayField, Struct]


class Document:
    """Ordered, immutable sequence of the packages found in one source text."""

    __slots__ = ("_packages",)

    def __init__(self, packages=()):
        object.__setattr__(self, '_packages', tuple(packages))

    def __setattr__(self, name, value):
        raise AttributeError("Document is immutable")

    @property
    def packages(self) -> Tuple[Package, ...]:
        return self._packages

    def __iter__(self) -> Iterator[Package]:
        return iter(self._packages)

    def __len__(self):
        return len(self._packages)

    def __getitem__(self, index):
        return self._packages[index]

    def __eq__(self, other):
        if isinstance(other, Document):
            return self._packages == other._packages
        if isinstance(other, (list, tuple)):
            return self._packages == tuple(other)
        return NotImplemented

    def __hash__(self):
        return hash(self._packages)

    def __repr__(self):
        return f"Document({list(self._packages)!r})"
