"""Extension hooks offered to plugins running alongside the synthesizer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol, Sequence

from fluent_builder.codemodel.expressions import Expr
from fluent_builder.codemodel.statements import Block
from fluent_builder.model.descriptors import PropertyDescriptor


class ImmutableInitHook(Protocol):
    """Injects immutability statements right after a field's init assignment."""

    def immutable_init(self, init_body: Block, product: Expr, prop: PropertyDescriptor) -> None:
        ...


class GroupInterfaceHook(Protocol):
    """Names the group interfaces a class participates in."""

    def group_interfaces_for(self, class_name: str) -> Sequence[str]:
        ...


@dataclass(frozen=True)
class SynthesisHooks:
    immutable: Optional[ImmutableInitHook] = None
    group_interfaces: Optional[GroupInterfaceHook] = None
