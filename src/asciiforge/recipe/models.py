"""Validated document models for recipes and shape recipes.

Wire documents use camelCase keys (``storeAs``, ``targetWidth``,
``offsetRow``); the models expose snake_case attributes and accept
either spelling on input.
"""

from __future__ import annotations

import json
import logging
from typing import Annotated, Any, Literal, Mapping, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from asciiforge.decorators import get_decorator_registry
from asciiforge.errors import RecipeValidationError
from asciiforge.grid import Grid

logger = logging.getLogger(__name__)

TEXT_PATTERN = r"^[A-Z0-9 !?.\-+:]+$"

ShapeKind = Literal["circle", "rectangle", "polygon", "text"]
AnchorName = Literal["center", "topLeft", "topRight", "bottomLeft", "bottomRight"]
Char = Annotated[str, Field(min_length=1, max_length=1)]


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")


# ---------------------------------------------------------------------------
# Shape parameters
# ---------------------------------------------------------------------------


class CircleParams(_WireModel):
    radius: int = Field(ge=1)
    filled: bool = False
    char: Char = "*"


class RectangleParams(_WireModel):
    width: int = Field(ge=1)
    height: int = Field(ge=1)
    char: Char = "*"
    filled: bool = False


class PolygonParams(_WireModel):
    sides: int = Field(ge=3)
    radius: int = Field(ge=1)
    filled: bool = False
    char: Char = "*"


class TextParams(_WireModel):
    text: str = Field(min_length=1, pattern=TEXT_PATTERN)


SHAPE_PARAMS: dict[str, type[_WireModel]] = {
    "circle": CircleParams,
    "rectangle": RectangleParams,
    "polygon": PolygonParams,
    "text": TextParams,
}


def _validated_shape_params(shape: str, params: Mapping[str, Any]) -> dict[str, Any]:
    return SHAPE_PARAMS[shape].model_validate(params).model_dump()


# ---------------------------------------------------------------------------
# Transform parameters
# ---------------------------------------------------------------------------


class RotateParams(_WireModel):
    degrees: int

    @field_validator("degrees")
    @classmethod
    def _allowed_degrees(cls, value: int) -> int:
        if value not in Grid.ALLOWED_DEGREES:
            raise ValueError("degrees must be one of 90, 180, 270")
        return value


class MirrorParams(_WireModel):
    axis: Literal["horizontal", "vertical"]


class ScaleParams(_WireModel):
    factor: float

    @field_validator("factor")
    @classmethod
    def _allowed_factor(cls, value: float) -> float:
        if value not in Grid.ALLOWED_FACTORS:
            raise ValueError("factor must be 0.5 or 2.0")
        return value


TRANSFORM_PARAMS: dict[str, type[_WireModel]] = {
    "rotate": RotateParams,
    "mirror": MirrorParams,
    "scale": ScaleParams,
}


# ---------------------------------------------------------------------------
# Fill pattern parameters
# ---------------------------------------------------------------------------


class SolidFillParams(_WireModel):
    char: Char = "*"


class DotsFillParams(_WireModel):
    char: Char = "."
    density: float = Field(default=1.0, ge=0.0, le=1.0)
    seed: int | None = None


class GradientFillParams(_WireModel):
    direction: Literal["horizontal", "vertical", "radial"] = "horizontal"
    density_string: str | None = Field(default=None, alias="densityString", min_length=1)
    reverse: bool = False


class DiagonalFillParams(_WireModel):
    char: Char = "/"


class CrosshatchFillParams(_WireModel):
    forward: Char = "/"
    back: Char = "\\"


FILL_PARAMS: dict[str, type[_WireModel]] = {
    "solid": SolidFillParams,
    "dots": DotsFillParams,
    "gradient": GradientFillParams,
    "diagonal": DiagonalFillParams,
    "crosshatch": CrosshatchFillParams,
}


def _validated_fill_params(pattern: str | None, params: Mapping[str, Any]) -> dict[str, Any]:
    """Check a ``fillPattern`` name and its ``fillParams``.

    Built-in patterns get their parameters validated; patterns registered
    at runtime without a params model are passed through unchanged.
    """
    if pattern is None:
        if params:
            raise ValueError("fillParams given without a fillPattern")
        return {}
    registry = get_decorator_registry()
    if pattern not in registry:
        raise ValueError(f"Unknown fill pattern: {pattern}. Available: {', '.join(registry.names())}")
    model = FILL_PARAMS.get(pattern)
    if model is None:
        return dict(params)
    return model.model_validate(params).model_dump(exclude_unset=True)


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------


class Position(_WireModel):
    row: int = 0
    col: int = 0


class Bounds(_WireModel):
    """Half-open clip region ``[start_row, end_row) x [start_col, end_col)``."""

    start_row: int = Field(alias="startRow")
    end_row: int = Field(alias="endRow")
    start_col: int = Field(alias="startCol")
    end_col: int = Field(alias="endCol")


class GenerateOperation(_WireModel):
    operation: Literal["generate"]
    shape: ShapeKind
    params: dict[str, Any] = Field(default_factory=dict)
    store_as: str = Field(alias="storeAs", min_length=1)
    fill_pattern: str | None = Field(default=None, alias="fillPattern")
    fill_params: dict[str, Any] = Field(default_factory=dict, alias="fillParams")

    @model_validator(mode="after")
    def _check_params(self) -> GenerateOperation:
        self.params = _validated_shape_params(self.shape, self.params)
        self.fill_params = _validated_fill_params(self.fill_pattern, self.fill_params)
        return self


class OverlayOperation(_WireModel):
    operation: Literal["overlay"]
    target: str
    source: str
    position: Position = Field(default_factory=Position)
    transparent: bool = True
    char: Char | None = None
    store_as: str = Field(alias="storeAs", min_length=1)


class ClipOperation(_WireModel):
    operation: Literal["clip"]
    source: str
    bounds: Bounds
    store_as: str = Field(alias="storeAs", min_length=1)


class TransformOperation(_WireModel):
    operation: Literal["transform"]
    source: str
    type: Literal["rotate", "mirror", "scale"]
    params: dict[str, Any] = Field(default_factory=dict)
    store_as: str = Field(alias="storeAs", min_length=1)

    @model_validator(mode="after")
    def _check_params(self) -> TransformOperation:
        self.params = TRANSFORM_PARAMS[self.type].model_validate(self.params).model_dump()
        return self


class TopAppendOperation(_WireModel):
    operation: Literal["topAppend"]
    target: str
    source: str
    store_as: str = Field(alias="storeAs", min_length=1)


class BottomAppendOperation(_WireModel):
    operation: Literal["bottomAppend"]
    target: str
    source: str
    store_as: str = Field(alias="storeAs", min_length=1)


class CenterHorizontallyOperation(_WireModel):
    operation: Literal["centerHorizontally"]
    source: str
    target_width: int = Field(alias="targetWidth", ge=1)
    store_as: str = Field(alias="storeAs", min_length=1)


Operation = Annotated[
    Union[
        GenerateOperation,
        OverlayOperation,
        ClipOperation,
        TransformOperation,
        TopAppendOperation,
        BottomAppendOperation,
        CenterHorizontallyOperation,
    ],
    Field(discriminator="operation"),
]


class Recipe(_WireModel):
    """Ordered operations plus the name of the grid to return."""

    operations: list[Operation] = Field(alias="recipe", min_length=1)
    output: str = Field(min_length=1)


# ---------------------------------------------------------------------------
# Shape recipes (declarative, order is z-order)
# ---------------------------------------------------------------------------


class Placement(_WireModel):
    anchor: AnchorName = "center"
    offset_row: int = Field(default=0, alias="offsetRow")
    offset_col: int = Field(default=0, alias="offsetCol")
    char: Char | None = None


class ShapeSpec(_WireModel):
    type: ShapeKind
    params: dict[str, Any] = Field(default_factory=dict)
    placement: Placement = Field(default_factory=Placement)
    fill_pattern: str | None = Field(default=None, alias="fillPattern")
    fill_params: dict[str, Any] = Field(default_factory=dict, alias="fillParams")

    @model_validator(mode="after")
    def _check_params(self) -> ShapeSpec:
        self.params = _validated_shape_params(self.type, self.params)
        self.fill_params = _validated_fill_params(self.fill_pattern, self.fill_params)
        return self


class ShapeRecipe(_WireModel):
    width: int = Field(ge=1)
    height: int = Field(ge=1)
    shapes: list[ShapeSpec] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Parsing helpers
# ---------------------------------------------------------------------------


def _format_errors(exc: ValidationError) -> list[str]:
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "<document>"
        messages.append(f"{location}: {error['msg']}")
    return messages


def _load(data: str | bytes | Mapping[str, Any], kind: str) -> Any:
    if isinstance(data, (str, bytes)):
        try:
            return json.loads(data)
        except json.JSONDecodeError as exc:
            raise RecipeValidationError(f"Invalid {kind}: not valid JSON ({exc})") from exc
    return data


def parse_recipe(data: str | bytes | Mapping[str, Any]) -> Recipe:
    """Validate a recipe document (JSON text or mapping).

    Raises :class:`RecipeValidationError` listing every problem found.
    """
    try:
        return Recipe.model_validate(_load(data, "recipe"))
    except ValidationError as exc:
        errors = _format_errors(exc)
        logger.debug("Recipe rejected with %d error(s)", len(errors))
        raise RecipeValidationError(f"Invalid recipe: {'; '.join(errors)}", errors) from exc


def validate_shape_params(shape: str, params: Mapping[str, Any]) -> dict[str, Any]:
    """Check factory arguments for one shape kind, dropping unset (``None``) values."""
    if shape not in SHAPE_PARAMS:
        raise RecipeValidationError(
            f"Unknown shape: {shape!r}. Available: {', '.join(SHAPE_PARAMS)}", [f"shape: {shape!r}"],
        )
    present = {key: value for key, value in params.items() if value is not None}
    try:
        return _validated_shape_params(shape, present)
    except ValidationError as exc:
        errors = _format_errors(exc)
        raise RecipeValidationError(f"Invalid {shape} parameters: {'; '.join(errors)}", errors) from exc


def parse_shape_recipe(data: str | bytes | Mapping[str, Any]) -> ShapeRecipe:
    """Validate a shape-recipe document (JSON text or mapping)."""
    try:
        return ShapeRecipe.model_validate(_load(data, "shape recipe"))
    except ValidationError as exc:
        errors = _format_errors(exc)
        raise RecipeValidationError(f"Invalid shape recipe: {'; '.join(errors)}", errors) from exc
