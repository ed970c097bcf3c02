"""Pydantic v2 models describing the input class hierarchy.

These are produced by an external schema front end and only read by the
synthesis pass: which classes exist, which class extends which, and which
properties each class declares.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, model_validator

from fluent_builder.errors import ModelInconsistencyError


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class TypeKind(str, Enum):
    """Shape of a declared property type."""
    PRIMITIVE = "primitive"
    REFERENCE = "reference"
    COLLECTION = "collection"
    ARRAY = "array"
    UNRESOLVED = "unresolved"


# ---------------------------------------------------------------------------
# Types
# ---------------------------------------------------------------------------

class TypeRef(BaseModel):
    """A declared type, as resolved by the schema front end."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Fully-qualified type name, e.g. 'com.acme.Item'")
    kind: TypeKind = Field(default=TypeKind.REFERENCE)
    element: Optional[TypeRef] = Field(
        default=None, description="Element type of a collection or array"
    )
    cloneable: bool = Field(default=False, description="Type supports clone()")
    partial_copyable: bool = Field(
        default=False, description="Type supports createCopy(tree, mode)"
    )

    @classmethod
    def primitive(cls, name: str) -> "TypeRef":
        return cls(name=name, kind=TypeKind.PRIMITIVE)

    @classmethod
    def reference(cls, name: str, **flags: Any) -> "TypeRef":
        return cls(name=name, kind=TypeKind.REFERENCE, **flags)

    @classmethod
    def collection(cls, element: "TypeRef", name: str = "List") -> "TypeRef":
        return cls(name=name, kind=TypeKind.COLLECTION, element=element)

    @classmethod
    def array(cls, element: "TypeRef") -> "TypeRef":
        return cls(name=f"{element.name}[]", kind=TypeKind.ARRAY, element=element)

    @property
    def is_collection(self) -> bool:
        return self.kind == TypeKind.COLLECTION

    @property
    def is_array(self) -> bool:
        return self.kind == TypeKind.ARRAY


# ---------------------------------------------------------------------------
# Properties & classes
# ---------------------------------------------------------------------------

class StorageField(BaseModel):
    """The field backing a property on the product class."""
    name: str = Field(..., description="Field name on the product class")
    final: bool = Field(default=False)
    static: bool = Field(default=False)


class PropertyDescriptor(BaseModel):
    """A single property declared by a class.

    ``storage`` defaults to a field named like ``field_name``. Passing
    ``storage=None`` explicitly describes a property without a backing field,
    which is never copied by the copy constructors.
    """

    base_name: str = Field(..., description="Capitalised name used in method names, e.g. 'Items'")
    field_name: str = Field(..., description="Storage field name, e.g. 'items'")
    type: TypeRef = Field(..., description="Declared type")
    has_getter: bool = Field(
        default=True, description="Properties without an accessor get no builder members"
    )
    storage: Optional[StorageField] = Field(default=None)

    @model_validator(mode="before")
    @classmethod
    def _default_storage(cls, data: Any) -> Any:
        if isinstance(data, dict) and "storage" not in data and "field_name" in data:
            data = {**data, "storage": {"name": data["field_name"]}}
        return data

    @classmethod
    def of(cls, name: str, type: TypeRef, **kwargs: Any) -> "PropertyDescriptor":
        """Shorthand deriving ``base_name`` from a camel-case field name."""
        return cls(base_name=name[:1].upper() + name[1:], field_name=name, type=type, **kwargs)

    @property
    def element_type(self) -> Optional[TypeRef]:
        return self.type.element


class ClassDescriptor(BaseModel):
    """A data-holding class and the properties it declares itself."""

    name: str = Field(..., description="Fully-qualified class name")
    superclass: Optional[str] = Field(default=None, description="Name of the superclass, if any")
    abstract: bool = Field(default=False)
    local: bool = Field(default=True, description="Defined by the current model")
    properties: list[PropertyDescriptor] = Field(
        default_factory=list, description="Declared properties in declaration order"
    )

    @property
    def simple_name(self) -> str:
        return self.name.rsplit(".", 1)[-1]

    def builder_properties(self) -> list[PropertyDescriptor]:
        """Declared properties that receive builder members."""
        return [prop for prop in self.properties if prop.has_getter]


class ClassModel(BaseModel):
    """Every class taking part in one synthesis pass, in model order."""

    classes: list[ClassDescriptor] = Field(default_factory=list)

    _index: dict[str, ClassDescriptor] = PrivateAttr(default_factory=dict)

    def model_post_init(self, __context: Any) -> None:
        index: dict[str, ClassDescriptor] = {}
        for descriptor in self.classes:
            if descriptor.name in index:
                raise ModelInconsistencyError(
                    "class is declared twice in the model", class_name=descriptor.name
                )
            index[descriptor.name] = descriptor
        self._index = index

    def __contains__(self, name: object) -> bool:
        return name in self._index

    def __len__(self) -> int:
        return len(self.classes)

    def get(self, name: str) -> Optional[ClassDescriptor]:
        return self._index.get(name)

    def superclass_of(self, descriptor: ClassDescriptor) -> Optional[ClassDescriptor]:
        """Return the superclass descriptor, or ``None`` for a hierarchy root.

        Raises:
            ModelInconsistencyError: The superclass is named but not part of
                the model. Externally resolved builders are only usable as
                property builders, never as a superclass builder.
        """
        if descriptor.superclass is None:
            return None
        superclass = self._index.get(descriptor.superclass)
        if superclass is None:
            raise ModelInconsistencyError(
                f"superclass '{descriptor.superclass}' is not part of the model; "
                "extending a builder known only to the resolver is not supported",
                class_name=descriptor.name,
            )
        return superclass

    def ancestors(self, descriptor: ClassDescriptor) -> list[ClassDescriptor]:
        """Return the superclass chain, immediate superclass first."""
        chain: list[ClassDescriptor] = []
        seen = {descriptor.name}
        current = self.superclass_of(descriptor)
        while current is not None:
            if current.name in seen:
                raise ModelInconsistencyError(
                    f"inheritance cycle through '{current.name}'",
                    class_name=descriptor.name,
                )
            seen.add(current.name)
            chain.append(current)
            current = self.superclass_of(current)
        return chain


TypeRef.model_rebuild()
