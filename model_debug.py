"""
model_debug.py
Tree rendering and plain-dict dump utilities for package models.
"""
from enum import Enum
from typing import Any, List, Tuple

from package_model import ModelField, ModelPackage, ModelStruct
from schema_ast import Attribute, TypeSource

# (label, children)
TreeNode = Tuple[str, List['TreeNode']]


def _field_label(index: int, field: ModelField) -> str:
    label = f"[{index}] "
    if field.type.source == TypeSource.NATIVE:
        label += field.type.native_type.value
    else:
        label += f"@{field.type.custom_type}"
    if field.is_array():
        label += f"[{field.size}]"
    label += f" {field.name}"
    if field.has_attribute(Attribute.DEPRECATED):
        label += " [Deprecated]"
    return label


def _struct_node(struct: ModelStruct) -> TreeNode:
    children = [("Fields", [(_field_label(i, f), []) for i, f in enumerate(struct.fields)])]
    if struct.structs:
        children.append(("Structures", [_struct_node(s) for s in struct.structs]))
    return (struct.name, children)


def _package_node(package: ModelPackage) -> TreeNode:
    children = []
    if package.fields:
        children.append(("Fields", [(_field_label(i, f), []) for i, f in enumerate(package.fields)]))
    if package.structs:
        children.append(("Structures", [_struct_node(s) for s in package.structs]))
    if not children:
        children.append(("(Empty Package)", []))
    return (f"{package.name} ({package.identifier or '-'})", children)


def render_tree(node: TreeNode) -> str:
    label, children = node
    lines = [label]

    def add_children(items, prefix):
        for i, (child_label, grandchildren) in enumerate(items):
            last = i == len(items) - 1
            lines.append(f"{prefix}{'└── ' if last else '├── '}{child_label}")
            add_children(grandchildren, prefix + ('    ' if last else '│   '))

    add_children(children, '')
    return "\n".join(lines)


def format_package_tree(package: ModelPackage) -> str:
    """
    Show the structure of a package as a text tree: name and identifier,
    its fields, then its structures (recursively).
    """
    return render_tree(_package_node(package))


def model_to_dict(model: Any) -> Any:
    """Plain dict/list view of a model object, suitable for json.dumps."""
    if isinstance(model, Enum):
        return model.value
    if isinstance(model, (list, tuple)):
        return [model_to_dict(item) for item in model]
    if hasattr(model, '__dict__'):
        return {key: model_to_dict(value) for key, value in vars(model).items()}
    return model
