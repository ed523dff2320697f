"""
package_model.py
Generator-friendly view of a parsed package: fields and structs grouped
apart, the package identifier pulled out, and types split into native and
user-defined ones.
"""
from enum import Enum
from typing import List, Optional

from schema_ast import Attribute, TypeSource


class NativeType(Enum):
    DYNINT = "dynint"    # integer sized from its value
    UINT8 = "uint8"
    UINT32 = "uint32"
    UINT64 = "uint64"
    BYTE = "byte"        # alias of uint8
    DOUBLE = "double"    # IEEE-754 64-bit
    STRING = "string"    # UTF-8
    BLOB = "blob"
    BOOL = "bool"        # stored as uint8
    UUID = "uuid"        # 16 raw bytes
    ARRAY = "array"
    ANY = "any"


class ObjectType(Enum):
    FIELD = "field"
    ARRAY = "array"


class ModelType:
    """
    Type of a field. `native_type` is set for native types, `custom_type`
    holds the struct name for user types.
    """
    def __init__(self, source: TypeSource, native_type: Optional[NativeType] = None, custom_type: Optional[str] = None):
        self.source = source
        self.native_type = native_type
        self.custom_type = custom_type

    @property
    def name(self) -> str:
        if self.source == TypeSource.NATIVE:
            return self.native_type.value
        return self.custom_type

    def __eq__(self, other):
        if not isinstance(other, ModelType):
            return NotImplemented
        return (self.source, self.native_type, self.custom_type) == (other.source, other.native_type, other.custom_type)

    def __repr__(self):
        return f"ModelType(source={self.source!r}, name={self.name!r})"


class ModelField:
    def __init__(self, object_type: ObjectType, type: ModelType, name: str,
                 size: str = "", attributes: Optional[List[Attribute]] = None,
                 line: Optional[int] = None):
        self.object_type = object_type
        self.type = type
        self.name = name
        # "*" for dynamic arrays, digits (possibly none) otherwise
        self.size = size
        self.attributes = attributes or []
        self.line = line

    def has_attribute(self, attribute: Attribute) -> bool:
        return attribute in self.attributes

    def is_array(self) -> bool:
        return self.object_type == ObjectType.ARRAY

    def __repr__(self):
        return f"ModelField(name={self.name!r}, object_type={self.object_type!r}, type={self.type!r}, size={self.size!r})"


class ModelStruct:
    def __init__(self, name: str, structs: Optional[List['ModelStruct']] = None,
                 fields: Optional[List[ModelField]] = None, line: Optional[int] = None):
        self.name = name
        self.structs = structs if structs is not None else []
        self.fields = fields if fields is not None else []
        self.line = line

    def __repr__(self):
        return f"ModelStruct(name={self.name!r}, fields={len(self.fields)}, structs={len(self.structs)})"


class ModelPackage:
    def __init__(self, name: str, identifier: Optional[str] = None,
                 structs: Optional[List[ModelStruct]] = None,
                 fields: Optional[List[ModelField]] = None, line: Optional[int] = None):
        self.name = name
        # Hex literal as written, e.g. "0x01"
        self.identifier = identifier
        self.structs = structs if structs is not None else []
        self.fields = fields if fields is not None else []
        self.line = line

    def raw_identifier(self) -> int:
        """The package identifier as a single byte."""
        if not self.identifier:
            raise ValueError(f"Package '{self.name}' has no identifier")
        value = int(self.identifier[2:], 16)
        if value > 0xFF:
            raise ValueError(f"Identifier {self.identifier} of package '{self.name}' does not fit in a byte")
        return value

    def __repr__(self):
        return f"ModelPackage(name={self.name!r}, identifier={self.identifier!r}, fields={len(self.fields)}, structs={len(self.structs)})"
