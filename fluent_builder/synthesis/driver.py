"""Synthesis pass driver.

Builds the builder registry once from the class model, then runs a
:class:`~fluent_builder.synthesis.generator.BuilderGenerator` per class.
Classes are independent once the registry is populated, so the async entry
point fans them out to worker threads.

Usage::

    synthesizer = BuilderSynthesizer(model, BuilderSettings.from_env())
    report = synthesizer.synthesize_all(fail_fast=False)
    print_report(report)
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Optional

from fluent_builder.config import BuilderSettings
from fluent_builder.errors import BuilderSynthesisError, ModelInconsistencyError
from fluent_builder.model.descriptors import ClassModel
from fluent_builder.synthesis.generator import BuilderGenerator, GeneratedBuilder
from fluent_builder.synthesis.hooks import SynthesisHooks
from fluent_builder.synthesis.oracle import DeclaredTypeOracle, TypeOracle
from fluent_builder.synthesis.registry import BuilderRegistry, BuilderResolver


@dataclass
class SynthesisReport:
    """Outcome of a pass: generated builders and per-class failures."""

    builders: dict[str, GeneratedBuilder] = field(default_factory=dict)
    failures: dict[str, str] = field(default_factory=dict)

    @property
    def succeeded(self) -> bool:
        return not self.failures

    def __getitem__(self, class_name: str) -> GeneratedBuilder:
        return self.builders[class_name]


class BuilderSynthesizer:
    """Runs builder synthesis over every class of a :class:`ClassModel`.

    Attributes:
        model: The input class hierarchy.
        settings: Naming and copy options for the pass.
        registry: Builders known to the pass, populated at construction.
        oracle: Type predicates used by the copy strategies.
        hooks: Optional extension hooks.
    """

    def __init__(
        self,
        model: ClassModel,
        settings: BuilderSettings | None = None,
        *,
        resolver: Optional[BuilderResolver] = None,
        hooks: SynthesisHooks | None = None,
        oracle: TypeOracle | None = None,
    ) -> None:
        self.model = model
        self.settings = settings or BuilderSettings()
        self.registry = BuilderRegistry.from_model(model, self.settings, resolver)
        self.oracle = oracle or DeclaredTypeOracle(model, self.registry)
        self.hooks = hooks or SynthesisHooks()

    def synthesize(self, class_name: str) -> GeneratedBuilder:
        """Generate the builder of a single class.

        Raises:
            ModelInconsistencyError: *class_name* is not part of the model, or
                something it references cannot be resolved.
            UnsupportedPropertyShapeError: A property has an unsupported type.
        """
        descriptor = self.model.get(class_name)
        if descriptor is None:
            raise ModelInconsistencyError("class is not part of the model", class_name=class_name)
        generator = BuilderGenerator(
            descriptor, self.model, self.registry, self.oracle, self.settings, self.hooks
        )
        return generator.generate()

    def synthesize_all(self, fail_fast: bool = True) -> SynthesisReport:
        """Generate builders for every class, in model order.

        Args:
            fail_fast: Re-raise the first error. When ``False`` the error is
                recorded against its class and the pass continues.
        """
        report = SynthesisReport()
        for descriptor in self.model.classes:
            try:
                report.builders[descriptor.name] = self.synthesize(descriptor.name)
            except BuilderSynthesisError as exc:
                if fail_fast:
                    raise
                report.failures[descriptor.name] = str(exc)
        return report

    async def synthesize_all_async(self, fail_fast: bool = True) -> SynthesisReport:
        """Like :meth:`synthesize_all`, generating classes concurrently."""
        names = [descriptor.name for descriptor in self.model.classes]
        results = await asyncio.gather(
            *(asyncio.to_thread(self.synthesize, name) for name in names),
            return_exceptions=True,
        )

        report = SynthesisReport()
        for name, result in zip(names, results):
            if isinstance(result, BuilderSynthesisError):
                if fail_fast:
                    raise result
                report.failures[name] = str(result)
            elif isinstance(result, BaseException):
                raise result
            else:
                report.builders[name] = result
        return report
