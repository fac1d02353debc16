"""Output schema handling.

An output schema is either a pydantic model class (validator-typed) or a
plain JSON-schema dict. Model classes are converted once, at this boundary,
and the rest of the package works with JSON schema.
"""

from __future__ import annotations

from typing import Any, TypeAlias

from pydantic import BaseModel, TypeAdapter, ValidationError
from pydantic_core import from_json

from completions.errors import NoObjectGeneratedError
from core.config import OutputShape

OutputSchema: TypeAlias = type[BaseModel] | dict[str, Any]

ARRAY_KEY = "elements"


def is_model_schema(schema: Any) -> bool:
    """True when the schema is a pydantic model class."""
    return isinstance(schema, type) and issubclass(schema, BaseModel)


def to_json_schema(schema: OutputSchema) -> dict[str, Any]:
    """JSON-schema form of an output schema."""
    if is_model_schema(schema):
        return schema.model_json_schema()  # type: ignore[union-attr]
    return schema  # type: ignore[return-value]


def response_schema(
    schema: OutputSchema, output: OutputShape | None
) -> dict[str, Any] | None:
    """Schema the provider is asked to follow for the given output shape.

    Arrays are requested wrapped in an object, since providers only accept
    object roots for structured output.
    """
    if output == "no-schema":
        return None

    json_schema = to_json_schema(schema)
    if output == "array":
        return {
            "type": "object",
            "properties": {ARRAY_KEY: {"type": "array", "items": json_schema}},
            "required": [ARRAY_KEY],
            "additionalProperties": False,
        }
    return json_schema


def _unwrap_array(value: Any) -> Any:
    if isinstance(value, dict) and isinstance(value.get(ARRAY_KEY), list):
        return value[ARRAY_KEY]
    return None


def validate_object(
    value: Any, schema: OutputSchema, output: OutputShape | None, text: str = ""
) -> Any:
    """Validate a complete parsed object against the output schema.

    Model schemas yield model instances; dict schemas yield the parsed JSON.

    Raises:
        NoObjectGeneratedError: If the value does not conform
    """
    if output == "no-schema":
        return value

    if output == "array":
        value = _unwrap_array(value)
        if value is None:
            raise NoObjectGeneratedError(
                f"Response has no '{ARRAY_KEY}' array", text=text
            )

    if not is_model_schema(schema):
        return value

    try:
        if output == "array":
            return TypeAdapter(list[schema]).validate_python(value)  # type: ignore[valid-type]
        return schema.model_validate(value)  # type: ignore[union-attr]
    except ValidationError as e:
        raise NoObjectGeneratedError(
            f"Response did not match schema: {e}", text=text
        ) from e


def parse_object(text: str) -> Any:
    """Parse a complete JSON response.

    Raises:
        NoObjectGeneratedError: If the text is not valid JSON
    """
    try:
        return from_json(text)
    except ValueError as e:
        raise NoObjectGeneratedError(f"Response is not valid JSON: {e}", text=text) from e


def parse_partial(text: str, output: OutputShape | None) -> Any:
    """Best-effort parse of JSON text that may still be arriving.

    Returns None while nothing parseable has been received. Incomplete
    trailing strings are kept so text fields grow as they stream.
    """
    if not text.strip():
        return None
    try:
        value = from_json(text, allow_partial="trailing-strings")
    except ValueError:
        return None

    if output == "array":
        return _unwrap_array(value)
    return value


def complete_elements(
    elements: list[Any] | None,
    schema: OutputSchema,
    final: bool,
    text: str = "",
) -> list[Any] | None:
    """Elements of a streamed array that are finished.

    While the stream runs the last element may still be arriving, so it is
    held back, and the list stops at the first element that fails the model
    schema. Once the stream has ended every element must validate. Returns
    None when nothing is ready yet.

    Raises:
        NoObjectGeneratedError: If a final element does not match the schema
    """
    if elements is None:
        return None
    if not final:
        elements = elements[:-1]
        if not elements:
            return None

    if not is_model_schema(schema):
        return list(elements)

    validated = []
    for element in elements:
        try:
            validated.append(schema.model_validate(element))  # type: ignore[union-attr]
        except ValidationError as e:
            if final:
                raise NoObjectGeneratedError(
                    f"Array element did not match schema: {e}", text=text
                ) from e
            break
    return validated if validated or final else None
