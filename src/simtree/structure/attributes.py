"""
Dynamic, name-indexed access to runtime attributes.

The accessor reads and writes public data members of nodes and of any value
reachable from them: pydantic models, dataclasses, plain objects and
mappings. Path segments use the component naming style (`Rain`, `Water`)
while Python attributes are snake_case, so each segment is looked up as the
exact attribute name, then as a pydantic field alias, then in its
`inflection.underscore` form.

Writes are validated against the attribute's declared annotation with a
strict pydantic `TypeAdapter`. The only conversion applied is int -> float
widening.
"""

import inspect
from collections.abc import Mapping, MutableMapping, Sequence
from typing import Any, get_type_hints

from inflection import underscore
from pydantic import BaseModel, PydanticSchemaGenerationError, TypeAdapter, ValidationError

from simtree.core.config import DEFAULT_CONFIG, ResolutionConfig
from simtree.core.tree_node import Node
from simtree.core.types import AttributeValue
from simtree.exceptions import (
    AttributeNotFoundError,
    AttributeTypeError,
    ReadOnlyAttributeError,
)
from simtree.structure.type_mapping import (
    CompatibilityLevel,
    check_compatibility,
    is_integer_value,
    type_name,
    union_members,
    widens_to_float,
)

_MISSING = object()

# pydantic machinery, never a data member
_MODEL_NAMESPACE = frozenset(dir(BaseModel))


def describe(value: Any) -> str:
    """Describe a value for error messages."""
    if isinstance(value, Node):
        return f"{value.kind} '{value.name}'"
    return type(value).__name__


class AttributeAccessor:
    """Reads and writes attributes by name, one segment at a time."""

    def __init__(self, config: ResolutionConfig = DEFAULT_CONFIG):
        self.config = config

    def read(self, value: Any, name: str) -> AttributeValue:
        """
        Read one attribute from a value.

        Params:
            value: Object, model or mapping to read from
            name: Attribute name in component or Python naming style

        Returns:
            The attribute's current value

        Raises:
            AttributeNotFoundError: If `name` does not name a readable public attribute
        """
        _, result = self._lookup(value, name)
        if result is _MISSING:
            raise AttributeNotFoundError(name, describe(value))
        return result

    def read_chain(self, value: Any, names: Sequence[str]) -> AttributeValue:
        """Read a chain of attributes, each read applied to the previous result."""
        current = value
        for name in names:
            current = self.read(current, name)
        return current

    def write(self, value: Any, name: str, new_value: AttributeValue) -> None:
        """
        Write one attribute on a value.

        Params:
            value: Object, model or mapping owning the attribute
            name: Attribute name in component or Python naming style
            new_value: Value to assign

        Raises:
            AttributeNotFoundError: If `name` does not name an existing attribute
            ReadOnlyAttributeError: If the attribute exists but cannot be assigned
            AttributeTypeError: If `new_value` does not fit the attribute's type
        """
        attribute, current = self._lookup(value, name)
        if current is _MISSING:
            raise AttributeNotFoundError(name, describe(value))

        if isinstance(value, Mapping):
            if not isinstance(value, MutableMapping):
                raise ReadOnlyAttributeError(name, describe(value))
            value[attribute] = self._check_untyped(name, current, new_value)
            return

        annotation = self._writable_annotation(value, attribute, name)
        if annotation is _MISSING:
            converted = self._check_untyped(name, current, new_value)
        else:
            converted = self._check_typed(name, annotation, new_value)
        try:
            setattr(value, attribute, converted)
        except AttributeError as exc:
            # frozen dataclasses and read-only descriptors
            raise ReadOnlyAttributeError(name, describe(value)) from exc

    def _candidates(self, value: Any, name: str) -> list[str]:
        candidates = [name]
        if isinstance(value, BaseModel):
            for field_name, field_info in type(value).model_fields.items():
                if field_info.alias == name:
                    candidates.append(field_name)
        snake = underscore(name)
        if snake not in candidates:
            candidates.append(snake)
        return candidates

    def _lookup(self, value: Any, name: str) -> tuple[str, Any]:
        if value is None:
            return name, _MISSING

        if isinstance(value, Mapping):
            for key in self._candidates(value, name):
                if key in value:
                    return key, value[key]
            return name, _MISSING

        for attribute in self._candidates(value, name):
            if attribute.startswith("_") or self._is_model_internal(value, attribute):
                continue
            try:
                member = getattr(value, attribute)
            except AttributeError:
                continue
            if inspect.isroutine(member):
                continue
            return attribute, member
        return name, _MISSING

    @staticmethod
    def _is_model_internal(value: Any, attribute: str) -> bool:
        return (
            isinstance(value, BaseModel)
            and attribute in _MODEL_NAMESPACE
            and attribute not in type(value).model_fields
        )

    def _writable_annotation(self, value: Any, attribute: str, name: str) -> Any:
        """Get the declared type of an assignable attribute, or _MISSING if undeclared."""
        owner = type(value)
        static = inspect.getattr_static(owner, attribute, None)

        if isinstance(static, property):
            if static.fset is None:
                raise ReadOnlyAttributeError(name, describe(value))
            return _hints(static.fget).get("return", _MISSING)

        if isinstance(value, BaseModel):
            field_info = owner.model_fields.get(attribute)
            if field_info is None:
                raise ReadOnlyAttributeError(name, describe(value))
            if field_info.frozen or owner.model_config.get("frozen"):
                raise ReadOnlyAttributeError(name, describe(value))
            return field_info.annotation

        if attribute not in getattr(value, "__dict__", {}) and attribute not in getattr(
            owner, "__slots__", ()
        ):
            raise ReadOnlyAttributeError(name, describe(value))
        return _hints(owner).get(attribute, _MISSING)

    def _check_typed(self, name: str, annotation: Any, new_value: Any) -> Any:
        if annotation is Any:
            return new_value

        if is_integer_value(new_value) and widens_to_float(annotation):
            if not self.config.numeric_widening:
                raise AttributeTypeError(
                    name, type_name(annotation), type(new_value).__name__
                )
            new_value = float(new_value)

        try:
            adapter = TypeAdapter(annotation)
        except PydanticSchemaGenerationError:
            classes = [m for m in union_members(annotation) if isinstance(m, type)]
            if classes and isinstance(new_value, tuple(classes)):
                return new_value
            raise AttributeTypeError(
                name, type_name(annotation), type(new_value).__name__
            ) from None

        try:
            return adapter.validate_python(new_value, strict=True)
        except ValidationError as exc:
            raise AttributeTypeError(
                name, type_name(annotation), type(new_value).__name__
            ) from exc

    def _check_untyped(self, name: str, current: Any, new_value: Any) -> Any:
        if current is None or new_value is None:
            return new_value
        level = check_compatibility(
            type(new_value), type(current), self.config.numeric_widening
        )
        if level == CompatibilityLevel.FORBIDDEN:
            raise AttributeTypeError(
                name, type(current).__name__, type(new_value).__name__
            )
        if level == CompatibilityLevel.SAFE:
            return float(new_value)
        return new_value


def _hints(obj: Any) -> dict[str, Any]:
    try:
        return get_type_hints(obj)
    except (NameError, TypeError):
        return {}
