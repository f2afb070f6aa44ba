"""
Tests for the attribute accessor.

Focus Areas:
1. Segment lookup: exact name, field alias and snake_case form
2. Reads on models, dataclasses, plain objects and mappings
3. Write validation and read-only detection
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, ClassVar

import pytest
from pydantic import BaseModel, ConfigDict, Field

from simtree import Node, ResolutionConfig
from simtree.exceptions import (
    AttributeNotFoundError,
    AttributeTypeError,
    ReadOnlyAttributeError,
)
from simtree.structure.attributes import AttributeAccessor, describe


class Fertiliser(Node):
    amount: float = 0.0
    nitrogen_type: str = Field(default="urea", alias="NType")
    history: dict[str, float] = Field(default_factory=dict)
    schedule: Any = None
    units: ClassVar[str] = "kg/ha"
    batch: int = Field(default=1, frozen=True)

    @property
    def total(self) -> float:
        return self.amount * 2

    @property
    def rate(self) -> float:
        return self.amount

    @rate.setter
    def rate(self, value: float) -> None:
        self.amount = value

    def apply(self) -> None:
        pass


@dataclass
class Layer:
    depth: float = 100.0
    label: str = "top"


@dataclass(frozen=True)
class FixedLayer:
    depth: float = 100.0


class Plain:
    def __init__(self):
        self.count = 3
        self.ratio = 0.5
        self.flag = False
        self._secret = "hidden"


class Locked(BaseModel):
    model_config = ConfigDict(frozen=True)

    value: int = 1


@pytest.fixture
def accessor():
    return AttributeAccessor()


@pytest.fixture
def fertiliser():
    return Fertiliser(name="Fertiliser", history={"Day1": 10.0})


class TestRead:
    """Test attribute reads."""

    def test_exact_and_snake_case(self, accessor, fertiliser):
        assert accessor.read(fertiliser, "amount") == 0.0
        assert accessor.read(fertiliser, "Amount") == 0.0
        assert accessor.read(fertiliser, "Name") == "Fertiliser"

    def test_alias(self, accessor, fertiliser):
        assert accessor.read(fertiliser, "NType") == "urea"
        assert accessor.read(fertiliser, "NitrogenType") == "urea"

    def test_property_and_class_var(self, accessor, fertiliser):
        fertiliser.amount = 3.0

        assert accessor.read(fertiliser, "Total") == 6.0
        assert accessor.read(fertiliser, "Units") == "kg/ha"

    def test_methods_are_not_attributes(self, accessor, fertiliser):
        with pytest.raises(AttributeNotFoundError):
            accessor.read(fertiliser, "Apply")

    def test_private_names_hidden(self, accessor):
        with pytest.raises(AttributeNotFoundError):
            accessor.read(Plain(), "_secret")

    @pytest.mark.parametrize(
        "attribute", ["ModelFieldsSet", "ModelConfig", "ModelFields", "model_extra"]
    )
    def test_model_internals_hidden(self, accessor, fertiliser, attribute):
        """pydantic machinery is not part of a node's data members."""
        with pytest.raises(AttributeNotFoundError):
            accessor.read(fertiliser, attribute)

    def test_model_internals_not_writable(self, accessor, fertiliser):
        with pytest.raises(AttributeNotFoundError):
            accessor.write(fertiliser, "ModelConfig", {})

    def test_mapping_keys_not_filtered(self, accessor):
        assert accessor.read({"model_config": 1}, "ModelConfig") == 1

    def test_mapping(self, accessor, fertiliser):
        assert accessor.read(fertiliser, "History") == {"Day1": 10.0}
        assert accessor.read_chain(fertiliser, ["History", "Day1"]) == 10.0
        assert accessor.read({"leaf_area": 2.0}, "LeafArea") == 2.0

    def test_missing_mapping_key(self, accessor, fertiliser):
        with pytest.raises(AttributeNotFoundError) as exc_info:
            accessor.read_chain(fertiliser, ["History", "Day2"])

        assert "dict" in str(exc_info.value)

    def test_dataclass_and_plain_object(self, accessor):
        assert accessor.read(Layer(), "Depth") == 100.0
        assert accessor.read(Plain(), "Count") == 3

    def test_none_has_no_attributes(self, accessor, fertiliser):
        with pytest.raises(AttributeNotFoundError):
            accessor.read_chain(fertiliser, ["Schedule", "Start"])

    def test_missing_message_names_owner(self, accessor, fertiliser):
        with pytest.raises(AttributeNotFoundError) as exc_info:
            accessor.read(fertiliser, "Phosphorus")

        assert "Fertiliser 'Fertiliser'" in str(exc_info.value)


class TestWrite:
    """Test attribute writes."""

    def test_typed_write(self, accessor, fertiliser):
        accessor.write(fertiliser, "Amount", 25.5)

        assert fertiliser.amount == 25.5

    def test_alias_write(self, accessor, fertiliser):
        accessor.write(fertiliser, "NType", "nitrate")

        assert fertiliser.nitrogen_type == "nitrate"

    def test_int_widening(self, accessor, fertiliser):
        accessor.write(fertiliser, "Amount", 25)

        assert fertiliser.amount == 25.0
        assert isinstance(fertiliser.amount, float)

    def test_no_widening_when_disabled(self, fertiliser):
        accessor = AttributeAccessor(ResolutionConfig(numeric_widening=False))

        with pytest.raises(AttributeTypeError):
            accessor.write(fertiliser, "Amount", 25)

    def test_no_narrowing(self, accessor):
        layer = Layer()

        with pytest.raises(AttributeTypeError):
            accessor.write(Plain(), "Count", 2.5)
        with pytest.raises(AttributeTypeError):
            accessor.write(layer, "Label", 3)

    def test_no_string_coercion(self, accessor, fertiliser):
        with pytest.raises(AttributeTypeError) as exc_info:
            accessor.write(fertiliser, "Amount", "25")

        assert exc_info.value.expected == "float"
        assert exc_info.value.actual == "str"
        assert fertiliser.amount == 0.0

    def test_setter_property(self, accessor, fertiliser):
        accessor.write(fertiliser, "Rate", 4)

        assert fertiliser.amount == 4.0

    def test_any_accepts_anything(self, accessor, fertiliser):
        accessor.write(fertiliser, "Schedule", ["Day1", "Day5"])

        assert fertiliser.schedule == ["Day1", "Day5"]

    def test_mapping_entry(self, accessor, fertiliser):
        accessor.write(fertiliser.history, "Day1", 12)

        assert fertiliser.history["Day1"] == 12.0

    def test_dataclass_write(self, accessor):
        layer = Layer()
        accessor.write(layer, "Depth", 50)

        assert layer.depth == 50.0

    def test_untyped_write(self, accessor):
        plain = Plain()
        accessor.write(plain, "Ratio", 1)
        accessor.write(plain, "Flag", True)

        assert plain.ratio == 1.0
        assert plain.flag is True

    def test_untyped_bool_is_not_int(self, accessor):
        with pytest.raises(AttributeTypeError):
            accessor.write(Plain(), "Count", True)

    def test_missing_attribute(self, accessor, fertiliser):
        with pytest.raises(AttributeNotFoundError):
            accessor.write(fertiliser, "Potassium", 1.0)


class TestReadOnly:
    """Test detection of attributes that can be read but not written."""

    @pytest.mark.parametrize("attribute", ["Total", "Units", "Batch", "Kind", "Parent"])
    def test_node_read_only(self, accessor, fertiliser, attribute):
        with pytest.raises(ReadOnlyAttributeError):
            accessor.write(fertiliser, attribute, 1)

    def test_frozen_model(self, accessor):
        with pytest.raises(ReadOnlyAttributeError):
            accessor.write(Locked(), "Value", 2)

    def test_frozen_dataclass(self, accessor):
        with pytest.raises(ReadOnlyAttributeError):
            accessor.write(FixedLayer(), "Depth", 1.0)

    def test_read_only_mapping(self, accessor):
        with pytest.raises(ReadOnlyAttributeError):
            accessor.write(MappingProxyType({"a": 1}), "a", 2)


class TestDescribe:
    """Test owner descriptions used in messages."""

    def test_node(self, fertiliser):
        assert describe(fertiliser) == "Fertiliser 'Fertiliser'"

    def test_other_values(self):
        assert describe(Layer()) == "Layer"
        assert describe({}) == "dict"
