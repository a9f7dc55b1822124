# tests/core/test_schema.py
"""
Schema 形态识别测试
"""
from dataclasses import dataclass
from typing import Annotated, Any, Dict, List, Literal, Optional, Sequence, Tuple

import pytest
from annotated_types import Len
from pydantic import BaseModel, RootModel, conlist
from typing_extensions import TypedDict

from typedprompt.core.structure.schema import (
    ParsePolicy,
    Shape,
    classify,
    describe,
    policy_for,
    to_json_schema,
)


class User(BaseModel):
    name: str
    age: int


class UserList(RootModel[List[User]]):
    pass


class Point(TypedDict):
    x: int
    y: int


@dataclass
class Pair:
    left: int
    right: int


class TestClassify:

    @pytest.mark.parametrize("schema", [str, None, Annotated[str, "doc"]])
    def test_text(self, schema):
        assert classify(schema)[0] is Shape.TEXT

    @pytest.mark.parametrize("schema", [User, dict, Dict[str, int], Point, Pair])
    def test_object(self, schema):
        assert classify(schema)[0] is Shape.OBJECT

    @pytest.mark.parametrize(
        "schema, element",
        [
            (list[int], int),
            (List[User], User),
            (Tuple[str, ...], str),
            (Sequence[float], float),
            (set[str], str),
            (conlist(int, min_length=1), int),
            (Annotated[list[int], Len(5, 5)], int),
            (UserList, User),
            (list, Any),
        ],
    )
    def test_sequence(self, schema, element):
        shape, found = classify(schema)
        assert shape is Shape.SEQUENCE
        assert found == element

    @pytest.mark.parametrize("schema", [int, float, bool, Literal["a", "b"], Optional[int], Tuple[int, str]])
    def test_scalar(self, schema):
        assert classify(schema)[0] is Shape.SCALAR


class TestPolicy:

    def test_policies(self):
        assert policy_for(Shape.TEXT) == ParsePolicy(apply_extraction=False, apply_parsing=False)
        assert policy_for(Shape.OBJECT) == ParsePolicy(apply_extraction=True, apply_parsing=True)
        assert policy_for(Shape.SEQUENCE) == ParsePolicy(apply_extraction=True, apply_parsing=True)
        assert policy_for(Shape.SCALAR) == ParsePolicy(apply_extraction=False, apply_parsing=True)


class TestDescribe:

    def test_defaults_to_text(self):
        info = describe()
        assert info.shape is Shape.TEXT
        assert info.element_adapter is None
        assert info.policy.apply_extraction is False

    def test_sequence_has_element_adapter(self):
        info = describe(list[User])
        assert info.is_sequence
        assert info.element_schema is User
        assert info.element_adapter.validate_python({"name": "A", "age": 1}) == User(name="A", age=1)

    def test_object_info(self):
        info = describe(User)
        assert info.shape is Shape.OBJECT
        assert info.name == "User"
        assert info.element_adapter is None


def test_to_json_schema():
    schema = to_json_schema(User)
    assert schema["type"] == "object"
    assert set(schema["properties"]) == {"name", "age"}
