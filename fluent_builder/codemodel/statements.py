"""Statements and blocks of the generated code model.

A :class:`Block` accumulates statements while a builder is being assembled
and is sealed when the owning class is snapshotted; after that any attempt
to add a statement raises ``RuntimeError``. Compound statements (``If``,
``ForEach``, ``TryCatch``) own nested blocks that are filled the same way.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Optional

from fluent_builder.codemodel.expressions import Expr, Var
from fluent_builder.codemodel.types import TypeExpr


class Block:
    """An ordered, append-only list of statements."""

    def __init__(self) -> None:
        self._statements: list[Stmt] = []
        self._sealed = False

    # -- Inspection --------------------------------------------------------

    @property
    def statements(self) -> tuple["Stmt", ...]:
        return tuple(self._statements)

    @property
    def sealed(self) -> bool:
        return self._sealed

    def __iter__(self) -> Iterator["Stmt"]:
        return iter(tuple(self._statements))

    def __len__(self) -> int:
        return len(self._statements)

    def __getitem__(self, index: int) -> "Stmt":
        return self._statements[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Block):
            return NotImplemented
        return self._statements == other._statements

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Block({self._statements!r})"

    # -- Construction ------------------------------------------------------

    def add(self, stmt: "Stmt") -> "Stmt":
        if self._sealed:
            raise RuntimeError("Cannot add statements to a sealed block")
        self._statements.append(stmt)
        return stmt

    def assign(self, target: Expr, value: Expr) -> None:
        self.add(Assign(target, value))

    def eval(self, expr: Expr) -> None:
        self.add(Eval(expr))

    def return_(self, value: Optional[Expr] = None) -> None:
        self.add(Return(value))

    def throw(self, value: Expr) -> None:
        self.add(Throw(value))

    def decl(self, type: TypeExpr, name: str, init: Optional[Expr] = None) -> Var:
        self.add(Declare(type, name, init))
        return Var(name)

    def if_(self, condition: Expr) -> "If":
        return self.add(If(condition))  # type: ignore[return-value]

    def for_each(self, var_type: TypeExpr, var_name: str, iterable: Expr) -> "ForEach":
        return self.add(ForEach(var_type, var_name, iterable))  # type: ignore[return-value]

    def try_catch(self, exception_type: TypeExpr, var_name: str = "e") -> "TryCatch":
        return self.add(TryCatch(exception_type, var_name))  # type: ignore[return-value]

    def seal(self) -> None:
        """Freeze this block and every nested block."""
        self._sealed = True
        for stmt in self._statements:
            for nested in stmt.blocks():
                nested.seal()


class Stmt:
    """Base class for statements."""

    def blocks(self) -> tuple[Block, ...]:
        return ()


@dataclass(frozen=True)
class Assign(Stmt):
    target: Expr
    value: Expr


@dataclass(frozen=True)
class Eval(Stmt):
    """An expression evaluated for its side effect."""
    expr: Expr


@dataclass(frozen=True)
class Return(Stmt):
    value: Optional[Expr] = None


@dataclass(frozen=True)
class Throw(Stmt):
    value: Expr


@dataclass(frozen=True)
class Declare(Stmt):
    """A final local variable declaration."""
    type: TypeExpr
    name: str
    init: Optional[Expr] = None

    @property
    def var(self) -> Var:
        return Var(self.name)


@dataclass(frozen=True)
class If(Stmt):
    condition: Expr
    then: Block = field(default_factory=Block)
    orelse: Block = field(default_factory=Block)

    def blocks(self) -> tuple[Block, ...]:
        return (self.then, self.orelse)


@dataclass(frozen=True)
class ForEach(Stmt):
    var_type: TypeExpr
    var_name: str
    iterable: Expr
    body: Block = field(default_factory=Block)

    @property
    def var(self) -> Var:
        return Var(self.var_name)

    def blocks(self) -> tuple[Block, ...]:
        return (self.body,)


@dataclass(frozen=True)
class TryCatch(Stmt):
    """``try { body } catch (exception_type var_name) { handler }``."""
    exception_type: TypeExpr
    var_name: str = "e"
    body: Block = field(default_factory=Block)
    handler: Block = field(default_factory=Block)

    @property
    def var(self) -> Var:
        return Var(self.var_name)

    def blocks(self) -> tuple[Block, ...]:
        return (self.body, self.handler)


def walk(block: Block) -> Iterator[Stmt]:
    """Yield every statement of *block*, depth first, in source order."""
    for stmt in block:
        yield stmt
        for nested in stmt.blocks():
            yield from walk(nested)
