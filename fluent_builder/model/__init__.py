"""Input model of a synthesis pass.

Describes the class hierarchy handed over by the schema front end and the
selection trees used by partial copies.

Usage::

    from fluent_builder.model import ClassDescriptor, ClassModel, PropertyDescriptor, TypeRef

    model = ClassModel(classes=[
        ClassDescriptor(name="com.acme.Base", properties=[
            PropertyDescriptor.of("id", TypeRef.primitive("int")),
        ]),
        ClassDescriptor(name="com.acme.Derived", superclass="com.acme.Base"),
    ])
"""

from fluent_builder.model.descriptors import (
    ClassDescriptor,
    ClassModel,
    PropertyDescriptor,
    StorageField,
    TypeKind,
    TypeRef,
)
from fluent_builder.model.selection import SelectionMode, SelectionTree

__all__ = [
    "ClassDescriptor",
    "ClassModel",
    "PropertyDescriptor",
    "SelectionMode",
    "SelectionTree",
    "StorageField",
    "TypeKind",
    "TypeRef",
]
