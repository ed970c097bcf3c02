"""Readable outlines of generated builders, rendered with Jinja2."""

from fluent_builder.render.outline import OutlineRenderer, render_block, render_expr, render_type

__all__ = ["OutlineRenderer", "render_block", "render_expr", "render_type"]
