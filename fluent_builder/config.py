"""Fluent builder synthesis configuration.

Centralised, typed configuration for a synthesis pass. All settings use
Pydantic v2 models so they can be validated at construction time and loaded
from JSON or environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field


_TRUE_VALUES = {"1", "true", "yes", "on"}


class NamingConfig(BaseModel):
    """Identifiers used for every generated type, field, method and variable."""

    builder_class_name: str = Field(default="Builder", min_length=1)
    builder_interface_name: str = Field(
        default="BuildSupport", min_length=1,
        description="Nested builder interface name on group interfaces",
    )
    type_param: str = Field(default="TParentBuilder", min_length=1)
    new_builder_method: str = Field(default="builder", min_length=1)
    new_copy_builder_method: str = Field(default="newCopyBuilder", min_length=1)
    copy_method: str = Field(default="copyOf", min_length=1)
    copy_except_method: str = Field(default="copyExcept", min_length=1)
    copy_only_method: str = Field(default="copyOnly", min_length=1)
    with_prefix: str = Field(default="with", min_length=1)
    add_prefix: str = Field(default="add", min_length=1)
    build_method: str = Field(default="build", min_length=1)
    init_method: str = Field(default="init", min_length=1)
    end_method: str = Field(default="end", min_length=1)
    clone_method: str = Field(default="clone", min_length=1)
    partial_copy_method: str = Field(
        default="createCopy", min_length=1,
        description="Method of partial-copyable types taking (tree, mode)",
    )
    parent_builder_field: str = Field(default="_parentBuilder", min_length=1)
    product_field: str = Field(default="_product", min_length=1)
    builder_field_suffix: str = Field(default="_Builder", min_length=1)

    def with_method(self, base_name: str) -> str:
        """Return the ``with`` mutator name for a property base name."""
        return f"{self.with_prefix}{base_name}"

    def add_method(self, base_name: str) -> str:
        """Return the ``add`` mutator name for a property base name."""
        return f"{self.add_prefix}{base_name}"

    def builder_name(self, class_name: str) -> str:
        """Return the fully-qualified builder name nested in *class_name*."""
        return f"{class_name}.{self.builder_class_name}"


class CopyConfig(BaseModel):
    """Which copy entry points a pass generates."""

    partial_copy: bool = Field(
        default=True, description="Generate the selection-tree driven copy constructor"
    )
    narrow_copy: bool = Field(
        default=False,
        description="Deep-copy buildable fields with the declared type's builder",
    )
    new_copy_builder_method: bool = Field(
        default=True, description="Generate newCopyBuilder() on product classes"
    )


class BuilderSettings(BaseModel):
    """Global settings for one synthesis pass.

    Instances are created once by the caller (or by :meth:`from_env`) and
    handed to :class:`~fluent_builder.synthesis.driver.BuilderSynthesizer`,
    which threads them through every emitter.
    """

    naming: NamingConfig = Field(default_factory=NamingConfig)
    copying: CopyConfig = Field(default_factory=CopyConfig)
    interface_only: bool = Field(
        default=False,
        description="Declare builder interfaces only (no fields or method bodies)",
    )

    @classmethod
    def load(cls, path: Path) -> "BuilderSettings":
        """Load settings from a JSON file.

        Args:
            path: The JSON file to read.

        Returns:
            A validated ``BuilderSettings`` instance.
        """
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "BuilderSettings":
        """Build settings from environment variables.

        Recognised variables (all optional):
            FLUENT_BUILDER_CLASS_NAME, FLUENT_BUILDER_TYPE_PARAM,
            FLUENT_BUILDER_NEW_BUILDER_METHOD, FLUENT_BUILDER_COPY_METHOD,
            FLUENT_BUILDER_PARTIAL_COPY, FLUENT_BUILDER_NARROW_COPY,
            FLUENT_BUILDER_NEW_COPY_BUILDER, FLUENT_BUILDER_INTERFACE_ONLY.
        """
        naming_kwargs: dict[str, Any] = {}
        if os.environ.get("FLUENT_BUILDER_CLASS_NAME"):
            naming_kwargs["builder_class_name"] = os.environ["FLUENT_BUILDER_CLASS_NAME"]
        if os.environ.get("FLUENT_BUILDER_TYPE_PARAM"):
            naming_kwargs["type_param"] = os.environ["FLUENT_BUILDER_TYPE_PARAM"]
        if os.environ.get("FLUENT_BUILDER_NEW_BUILDER_METHOD"):
            naming_kwargs["new_builder_method"] = os.environ["FLUENT_BUILDER_NEW_BUILDER_METHOD"]
        if os.environ.get("FLUENT_BUILDER_COPY_METHOD"):
            naming_kwargs["copy_method"] = os.environ["FLUENT_BUILDER_COPY_METHOD"]

        copy_kwargs: dict[str, Any] = {}
        if os.environ.get("FLUENT_BUILDER_PARTIAL_COPY"):
            copy_kwargs["partial_copy"] = _env_flag("FLUENT_BUILDER_PARTIAL_COPY")
        if os.environ.get("FLUENT_BUILDER_NARROW_COPY"):
            copy_kwargs["narrow_copy"] = _env_flag("FLUENT_BUILDER_NARROW_COPY")
        if os.environ.get("FLUENT_BUILDER_NEW_COPY_BUILDER"):
            copy_kwargs["new_copy_builder_method"] = _env_flag("FLUENT_BUILDER_NEW_COPY_BUILDER")

        return cls(
            naming=NamingConfig(**naming_kwargs),
            copying=CopyConfig(**copy_kwargs),
            interface_only=_env_flag("FLUENT_BUILDER_INTERFACE_ONLY"),
        )


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in _TRUE_VALUES
