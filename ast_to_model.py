"""
Transform: Converts parsed schema_ast packages into package_model objects for code generation.
"""
from typing import Iterable, List

from debug_output import debug_print, resolve_verbose
from package_model import ModelField, ModelPackage, ModelStruct, ModelType, NativeType, ObjectType
from schema_ast import ArrayField, Document, Field, IdDeclaration, Package, Struct, TypeSource


def convert_type(member: Field) -> ModelType:
    if member.source == TypeSource.NATIVE:
        return ModelType(TypeSource.NATIVE, native_type=NativeType(member.kind))
    return ModelType(TypeSource.USER, custom_type=member.kind)


def convert_field(member: Field) -> ModelField:
    if isinstance(member, ArrayField):
        object_type, size = ObjectType.ARRAY, member.size
    else:
        object_type, size = ObjectType.FIELD, ""
    return ModelField(
        object_type,
        convert_type(member),
        member.name,
        size=size,
        attributes=list(member.attributes or ()),
        line=member.line,
    )


def convert_struct(node: Struct) -> ModelStruct:
    struct = ModelStruct(node.name, line=node.line)
    for member in node.contents:
        if isinstance(member, Struct):
            struct.structs.append(convert_struct(member))
        else:
            struct.fields.append(convert_field(member))
    return struct


def convert_package(node: Package, verbose: bool = False) -> ModelPackage:
    """
    Group a package's members: fields and arrays keep their order in
    `fields`, structs go to `structs`, and the id declaration becomes the
    package identifier (the last one wins).
    """
    verbose = resolve_verbose(verbose)
    package = ModelPackage(node.name, line=node.line)
    for member in node.contents:
        if isinstance(member, IdDeclaration):
            if package.identifier is not None:
                debug_print(f"package '{node.name}': identifier {package.identifier} replaced by {member.value}", verbose)
            package.identifier = member.value
        elif isinstance(member, Struct):
            package.structs.append(convert_struct(member))
        else:
            package.fields.append(convert_field(member))
    debug_print(f"Converted {package!r}", verbose)
    return package


def convert_document(document: Document, verbose: bool = False) -> List[ModelPackage]:
    return [convert_package(package, verbose) for package in document]


def sort_packages(packages: Iterable[ModelPackage]) -> List[ModelPackage]:
    """Packages ordered by their numeric identifier."""
    return sorted(packages, key=lambda p: p.raw_identifier())
