"""Exceptions raised while synthesizing builders.

Every error carries the class (and, where known, the property) that was being
processed so a caller can report exactly which part of the input model is
inconsistent. Generation is deterministic: re-running with the same model
reproduces the same error, so nothing here is retried.
"""

from __future__ import annotations


class BuilderSynthesisError(Exception):
    """Raised when the builder for a class cannot be generated."""

    def __init__(self, message: str, class_name: str = "", field_name: str = "") -> None:
        self.class_name = class_name
        self.field_name = field_name
        location = class_name
        if field_name:
            location = f"{class_name}.{field_name}" if class_name else field_name
        super().__init__(f"{location}: {message}" if location else message)


class ModelInconsistencyError(BuilderSynthesisError):
    """A referenced type, superclass or builder cannot be resolved."""


class UnsupportedPropertyShapeError(ModelInconsistencyError):
    """A property type is neither scalar, reference, collection nor array."""
