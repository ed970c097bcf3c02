"""Property classification.

Decides the shape of a property, which in turn selects the members emitted
for it and the strategy used to copy it.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from fluent_builder.codemodel.types import LIST, TypeExpr
from fluent_builder.errors import UnsupportedPropertyShapeError
from fluent_builder.model.descriptors import PropertyDescriptor, TypeKind, TypeRef
from fluent_builder.synthesis.registry import BuilderDescriptor, BuilderRegistry


class PropertyKind(str, Enum):
    SCALAR = "scalar"
    SINGULAR_PLAIN = "singular_plain"
    SINGULAR_BUILDABLE = "singular_buildable"
    COLLECTION_PLAIN = "collection_plain"
    COLLECTION_BUILDABLE = "collection_buildable"
    ARRAY = "array"


@dataclass(frozen=True)
class ClassifiedProperty:
    """A property together with its shape and, if buildable, the child builder."""

    prop: PropertyDescriptor
    kind: PropertyKind
    child_builder: Optional[BuilderDescriptor] = None

    @property
    def is_collection(self) -> bool:
        return self.kind in (PropertyKind.COLLECTION_PLAIN, PropertyKind.COLLECTION_BUILDABLE)

    @property
    def is_buildable(self) -> bool:
        return self.child_builder is not None

    @property
    def element_ref(self) -> Optional[TypeRef]:
        return self.prop.type.element

    @property
    def field_type(self) -> TypeExpr:
        return type_expr_of(self.prop.type)

    @property
    def element_type(self) -> TypeExpr:
        if self.prop.type.element is None:
            raise ValueError(f"{self.prop.field_name} has no element type")
        return type_expr_of(self.prop.type.element)


def classify(prop: PropertyDescriptor, registry: BuilderRegistry, class_name: str = "") -> ClassifiedProperty:
    """Classify *prop* against the builders known to *registry*.

    Raises:
        UnsupportedPropertyShapeError: The type is unresolved, or a collection
            or array lacks its element type.
    """
    type_ref = prop.type
    if type_ref.kind == TypeKind.COLLECTION:
        element = _require_element(prop, class_name)
        child = registry.get(element.name)
        if child is not None:
            return ClassifiedProperty(prop, PropertyKind.COLLECTION_BUILDABLE, child)
        return ClassifiedProperty(prop, PropertyKind.COLLECTION_PLAIN)
    if type_ref.kind == TypeKind.ARRAY:
        _require_element(prop, class_name)
        return ClassifiedProperty(prop, PropertyKind.ARRAY)
    if type_ref.kind == TypeKind.PRIMITIVE:
        return ClassifiedProperty(prop, PropertyKind.SCALAR)
    if type_ref.kind == TypeKind.REFERENCE:
        child = registry.get(type_ref.name)
        if child is not None:
            return ClassifiedProperty(prop, PropertyKind.SINGULAR_BUILDABLE, child)
        return ClassifiedProperty(prop, PropertyKind.SINGULAR_PLAIN)
    raise UnsupportedPropertyShapeError(
        f"unsupported type '{type_ref.name}' ({type_ref.kind.value})",
        class_name=class_name,
        field_name=prop.field_name,
    )


def _require_element(prop: PropertyDescriptor, class_name: str) -> TypeRef:
    if prop.type.element is None:
        raise UnsupportedPropertyShapeError(
            f"{prop.type.kind.value} type '{prop.type.name}' has no element type",
            class_name=class_name,
            field_name=prop.field_name,
        )
    element = prop.type.element
    while element is not None:
        if element.kind == TypeKind.UNRESOLVED:
            raise UnsupportedPropertyShapeError(
                f"unresolved element type '{element.name}' in '{prop.type.name}'",
                class_name=class_name,
                field_name=prop.field_name,
            )
        element = element.element
    return prop.type.element


def type_expr_of(type_ref: TypeRef) -> TypeExpr:
    """Translate a model type into a code-model type expression."""
    if type_ref.kind == TypeKind.COLLECTION and type_ref.element is not None:
        return TypeExpr(type_ref.name or LIST.name).narrow(type_expr_of(type_ref.element))
    if type_ref.kind == TypeKind.ARRAY and type_ref.element is not None:
        return type_expr_of(type_ref.element).array_of()
    return TypeExpr(type_ref.name)
