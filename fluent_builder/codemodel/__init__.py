"""In-memory code model produced by a synthesis pass.

The model is language neutral in structure (types, fields, methods and
statement trees) and is handed to an external emitter that turns it into
source text. Classes are assembled with :class:`ClassAssembler` and frozen
into :class:`ClassSpec` snapshots.
"""

from fluent_builder.codemodel.declarations import (
    CONSTRUCTOR_NAME,
    ClassAssembler,
    ClassSpec,
    FieldSpec,
    MethodAssembler,
    MethodSpec,
    Modifier,
    Param,
)
from fluent_builder.codemodel.statements import Block, walk
from fluent_builder.codemodel.types import TypeExpr

__all__ = [
    "CONSTRUCTOR_NAME",
    "Block",
    "ClassAssembler",
    "ClassSpec",
    "FieldSpec",
    "MethodAssembler",
    "MethodSpec",
    "Modifier",
    "Param",
    "TypeExpr",
    "walk",
]
