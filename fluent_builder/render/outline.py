"""Jinja2 outline rendering of generated builders.

Turns a :class:`~fluent_builder.synthesis.generator.GeneratedBuilder` into a
Java-like listing for inspection and debugging. The listing is a readable
approximation of what an emitter would produce; it is never written to disk
by this module.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from fluent_builder.codemodel.declarations import ClassSpec, FieldSpec, MethodSpec, Modifier
from fluent_builder.codemodel.expressions import (
    AsList,
    Cast,
    Compare,
    Conditional,
    Expr,
    FieldRef,
    Invoke,
    Literal,
    New,
    Not,
    Null,
    Or,
    Super,
    This,
    ToArray,
    TypeTarget,
    Var,
)
from fluent_builder.codemodel.statements import (
    Assign,
    Block,
    Declare,
    Eval,
    ForEach,
    If,
    Return,
    Stmt,
    Throw,
    TryCatch,
)
from fluent_builder.codemodel.types import TypeExpr
from fluent_builder.synthesis.generator import GeneratedBuilder


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"

_MODIFIER_ORDER = (
    Modifier.PUBLIC,
    Modifier.PROTECTED,
    Modifier.PRIVATE,
    Modifier.ABSTRACT,
    Modifier.STATIC,
    Modifier.FINAL,
)

_INDENT = "    "


# ---------------------------------------------------------------------------
# OutlineRenderer
# ---------------------------------------------------------------------------


class OutlineRenderer:
    """Renders generated builders through the ``builder_outline.j2`` template."""

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        # Listings are code: nothing is escaped and a missing attribute raises.
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=False,
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters.update(
            type=render_type,
            expr=render_expr,
            field_decl=_field_decl_filter,
            class_header=_class_header_filter,
            method_header=_method_header_filter,
            body_lines=_body_lines_filter,
        )

    def render(self, generated: GeneratedBuilder, template_name: str = "builder_outline.j2") -> str:
        """Render the outline of one generated builder."""
        template = self.env.get_template(template_name)
        return template.render(generated=generated, spec=generated.builder)

    def render_all(self, builders: dict[str, GeneratedBuilder]) -> dict[str, str]:
        """Render every builder of a synthesis report, keyed by class name."""
        return {name: self.render(generated) for name, generated in builders.items()}


# ---------------------------------------------------------------------------
# Types and expressions
# ---------------------------------------------------------------------------


def render_type(type_expr: TypeExpr | None) -> str:
    if type_expr is None:
        return "void"
    return type_expr.render()


def render_expr(expr: Expr) -> str:
    """Render an expression in Java-like syntax."""
    if isinstance(expr, This):
        return "this"
    if isinstance(expr, Super):
        return "super"
    if isinstance(expr, Null):
        return "null"
    if isinstance(expr, Literal):
        return _literal(expr.value)
    if isinstance(expr, Var):
        return expr.name
    if isinstance(expr, TypeTarget):
        return expr.type.render()
    if isinstance(expr, FieldRef):
        return f"{render_expr(expr.target)}.{expr.name}"
    if isinstance(expr, Invoke):
        args = _args(expr.args)
        type_args = ""
        if expr.type_args:
            type_args = "<" + ", ".join(t.render() for t in expr.type_args) + ">"
        if expr.target is None:
            return f"{type_args}{expr.method}({args})"
        return f"{render_expr(expr.target)}.{type_args}{expr.method}({args})"
    if isinstance(expr, New):
        return f"new {expr.type.render()}({_args(expr.args)})"
    if isinstance(expr, Cast):
        return f"(({expr.type.render()}) {render_expr(expr.expr)})"
    if isinstance(expr, Compare):
        return f"{render_expr(expr.left)} {expr.op} {render_expr(expr.right)}"
    if isinstance(expr, Not):
        return f"!{render_expr(expr.expr)}"
    if isinstance(expr, Or):
        return f"({render_expr(expr.left)} || {render_expr(expr.right)})"
    if isinstance(expr, Conditional):
        return (
            f"(({render_expr(expr.test)}) ? {render_expr(expr.then)} : {render_expr(expr.orelse)})"
        )
    if isinstance(expr, AsList):
        return f"Arrays.asList({render_expr(expr.value)})"
    if isinstance(expr, ToArray):
        element = expr.element_type.render()
        return (
            f"StreamSupport.stream({render_expr(expr.value)}.spliterator(), false)"
            f".toArray({element}[]::new)"
        )
    raise TypeError(f"Cannot render expression {expr!r}")


def _literal(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'
    return str(value)


def _args(args: tuple[Expr, ...]) -> str:
    return ", ".join(render_expr(arg) for arg in args)


# ---------------------------------------------------------------------------
# Statements
# ---------------------------------------------------------------------------


def render_block(block: Block, depth: int = 0) -> list[str]:
    """Render *block* as indented source lines."""
    lines: list[str] = []
    for stmt in block:
        lines.extend(_render_stmt(stmt, depth))
    return lines


def _render_stmt(stmt: Stmt, depth: int) -> list[str]:
    pad = _INDENT * depth
    if isinstance(stmt, Assign):
        return [f"{pad}{render_expr(stmt.target)} = {render_expr(stmt.value)};"]
    if isinstance(stmt, Eval):
        return [f"{pad}{render_expr(stmt.expr)};"]
    if isinstance(stmt, Return):
        if stmt.value is None:
            return [f"{pad}return;"]
        return [f"{pad}return {render_expr(stmt.value)};"]
    if isinstance(stmt, Throw):
        return [f"{pad}throw {render_expr(stmt.value)};"]
    if isinstance(stmt, Declare):
        init = f" = {render_expr(stmt.init)}" if stmt.init is not None else ""
        return [f"{pad}final {stmt.type.render()} {stmt.name}{init};"]
    if isinstance(stmt, If):
        lines = [f"{pad}if ({render_expr(stmt.condition)}) {{"]
        lines.extend(render_block(stmt.then, depth + 1))
        if len(stmt.orelse):
            lines.append(f"{pad}}} else {{")
            lines.extend(render_block(stmt.orelse, depth + 1))
        lines.append(f"{pad}}}")
        return lines
    if isinstance(stmt, ForEach):
        lines = [f"{pad}for (final {stmt.var_type.render()} {stmt.var_name}: {render_expr(stmt.iterable)}) {{"]
        lines.extend(render_block(stmt.body, depth + 1))
        lines.append(f"{pad}}}")
        return lines
    if isinstance(stmt, TryCatch):
        lines = [f"{pad}try {{"]
        lines.extend(render_block(stmt.body, depth + 1))
        lines.append(f"{pad}}} catch (final {stmt.exception_type.render()} {stmt.var_name}) {{")
        lines.extend(render_block(stmt.handler, depth + 1))
        lines.append(f"{pad}}}")
        return lines
    raise TypeError(f"Cannot render statement {stmt!r}")


# ---------------------------------------------------------------------------
# Jinja2 custom filters
# ---------------------------------------------------------------------------


def _modifiers(modifiers: frozenset[Modifier]) -> str:
    return "".join(f"{m.value} " for m in _MODIFIER_ORDER if m in modifiers)


def _type_param(type_var: TypeExpr) -> str:
    if type_var.bound is not None:
        return f"{type_var.name} extends {type_var.bound.render()}"
    return type_var.name


def _type_params(type_vars: tuple[TypeExpr, ...]) -> str:
    if not type_vars:
        return ""
    return "<" + ", ".join(_type_param(t) for t in type_vars) + ">"


def _field_decl_filter(field: FieldSpec) -> str:
    init = f" = {render_expr(field.init)}" if field.init is not None else ""
    return f"{_modifiers(field.modifiers)}{field.type.render()} {field.name}{init};"


def _class_header_filter(spec: ClassSpec) -> str:
    simple_name = spec.name.rsplit(".", 1)[-1]
    kind = "interface" if spec.is_interface else "class"
    abstract = "abstract " if spec.is_abstract else ""
    header = f"public static {abstract}{kind} {simple_name}{_type_params(spec.type_params)}"
    if spec.extends is not None:
        header += f" extends {spec.extends.render()}"
    if spec.implements:
        keyword = "extends" if spec.is_interface else "implements"
        header += f" {keyword} " + ", ".join(t.render() for t in spec.implements)
    return header


def _method_header_filter(method: MethodSpec, owner: ClassSpec) -> str:
    params = ", ".join(
        f"final {p.type.render()}... {p.name}" if p.varargs else f"final {p.type.render()} {p.name}"
        for p in method.params
    )
    type_params = _type_params(method.type_params)
    if type_params:
        type_params += " "
    if method.is_constructor:
        name = owner.name.rsplit(".", 1)[-1]
        return f"{_modifiers(method.modifiers)}{name}({params})"
    return (
        f"{_modifiers(method.modifiers)}{type_params}"
        f"{render_type(method.return_type)} {method.name}({params})"
    )


def _body_lines_filter(block: Block, depth: int = 0) -> list[str]:
    return render_block(block, depth)
