"""
TypeScript model generator for the Kontent.ai Delivery SDK.

Generates one type per content type, snippet and taxonomy group plus
barrel files re-exporting them.
"""

from .generator import DeliveryModelGenerator
from .elements import ElementTypeMapper, ExtendedElement, InvalidElementError
from .references import ReferenceDescriptor, ReferenceResolver, References
from .emitter import EmittedFile, ModelEmitter
from .barrel import BarrelEmitter
from .naming import RESERVED_TYPE_NAMES, create_name_resolver

__all__ = [
    "DeliveryModelGenerator",
    "ElementTypeMapper",
    "ExtendedElement",
    "InvalidElementError",
    "ReferenceDescriptor",
    "ReferenceResolver",
    "References",
    "EmittedFile",
    "ModelEmitter",
    "BarrelEmitter",
    "RESERVED_TYPE_NAMES",
    "create_name_resolver",
    "create_generator",
]


def create_generator(config=None, reporter=None):
    """
    Create a Delivery SDK generator.

    Args:
        config: GeneratorConfig; defaults are used when omitted
        reporter: GenerationReporter notified about progress

    Returns:
        Configured DeliveryModelGenerator instance
    """
    return DeliveryModelGenerator(config, reporter)
