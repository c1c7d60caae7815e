"""Fill decorators for the blank cells of a grid."""

from asciiforge.decorators.fills import (
    BUILTIN_DECORATORS,
    CrosshatchFill,
    DiagonalFill,
    DotsFill,
    GradientFill,
    SolidFill,
)
from asciiforge.decorators.registry import (
    Decorator,
    DecoratorRegistry,
    apply_decorator,
    get_decorator,
    get_decorator_registry,
    register_decorator,
)

__all__ = [
    "BUILTIN_DECORATORS",
    "CrosshatchFill",
    "Decorator",
    "DecoratorRegistry",
    "DiagonalFill",
    "DotsFill",
    "GradientFill",
    "SolidFill",
    "apply_decorator",
    "get_decorator",
    "get_decorator_registry",
    "register_decorator",
]
