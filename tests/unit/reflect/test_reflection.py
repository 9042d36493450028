"""
spinegen — unit tests for type reflection

File: tests/unit/reflect/test_reflection.py
Last updated: 2026-10-19

Purpose
- Validate signatures derived from Python types and the value/spine mapping.

What this test file should cover
- Leaf, container, dataclass, sealed, enum, union and TypedDict shapes.
- Self-referential dataclasses reflected through cached thunks.
- spine_of/reify agreement and mismatch errors.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Optional, TypedDict, Union

import pytest

from spinegen.errors import ReflectionError, ReificationError
from spinegen.reflect import NONE_CONSTRUCTOR, Char, reify, sealed, signature_of, spine_of
from spinegen.shapes.signature import (
    SIG_BOOLEAN,
    SIG_CHAR,
    SIG_INT,
    SIG_NUMBER,
    SIG_STRING,
    SIG_UNIT,
    SigArray,
    SigProd,
    SigRecord,
)
from spinegen.shapes.spine import (
    S_UNIT,
    SArray,
    SChar,
    SInt,
    SNumber,
    SProd,
    SString,
    is_valid_spine,
    s_prod,
    spines_equal,
)

pytestmark = pytest.mark.unit


@dataclass(frozen=True)
class Point:
    x: int
    y: float


@sealed
class Expr:
    pass


@dataclass(frozen=True)
class Lit(Expr):
    value: int


@dataclass(frozen=True)
class Add(Expr):
    left: Expr
    right: Expr


@dataclass(frozen=True)
class Neg(Expr):
    inner: Expr


@dataclass
class Counter:
    name: str
    hits: int = field(default=0, init=False)


class Suit(enum.Enum):
    CLUBS = 1
    DIAMONDS = 2
    HEARTS = 3
    SPADES = 4


class Config(TypedDict):
    path: str
    retries: int
    tags: list[str]


@dataclass(frozen=True)
class Broken:
    missing: DoesNotExist  # type: ignore[name-defined]  # noqa: F821


class BrokenConfig(TypedDict):
    path: str
    missing: DoesNotExist  # type: ignore[name-defined]  # noqa: F821


def test_leaf_types() -> None:
    assert signature_of(bool) is SIG_BOOLEAN
    assert signature_of(int) is SIG_INT
    assert signature_of(float) is SIG_NUMBER
    assert signature_of(str) is SIG_STRING
    assert signature_of(Char) is SIG_CHAR
    assert signature_of(None) is SIG_UNIT
    assert signature_of(type(None)) is SIG_UNIT


def test_list_and_homogeneous_tuple_become_arrays() -> None:
    for tp in (list[int], tuple[int, ...]):
        sig = signature_of(tp)
        assert isinstance(sig, SigArray)
        assert sig.element() is SIG_INT


def test_dataclass_is_single_constructor_product() -> None:
    sig = signature_of(Point)

    assert isinstance(sig, SigProd)
    assert sig.type_name == "Point"
    assert sig.constructor_names == ("Point",)
    assert [item() for item in sig.constructors[0].fields] == [SIG_INT, SIG_NUMBER]


def test_non_init_fields_are_not_part_of_the_shape() -> None:
    sig = signature_of(Counter)

    assert isinstance(sig, SigProd)
    assert sig.constructors[0].arity == 1


def test_sealed_base_lists_variants_by_name_and_refers_to_itself() -> None:
    sig = signature_of(Expr)

    assert isinstance(sig, SigProd)
    assert sig.constructor_names == ("Add", "Lit", "Neg")
    add = sig.constructor("Add")
    assert add is not None
    assert add.fields[0]() is sig
    assert signature_of(Expr) is sig


def test_enum_members_become_nullary_constructors() -> None:
    sig = signature_of(Suit)

    assert isinstance(sig, SigProd)
    assert sig.constructor_names == ("CLUBS", "DIAMONDS", "HEARTS", "SPADES")
    assert all(constructor.arity == 0 for constructor in sig.constructors)


def test_optional_dataclass_union() -> None:
    sig = signature_of(Optional[Point])

    assert isinstance(sig, SigProd)
    assert sig.constructor_names == ("Point", NONE_CONSTRUCTOR)
    assert sig.type_name == "Point | None"


def test_typeddict_becomes_record_in_declaration_order() -> None:
    sig = signature_of(Config)

    assert isinstance(sig, SigRecord)
    assert sig.labels == ("path", "retries", "tags")
    assert isinstance(sig.fields[2].value(), SigArray)


@pytest.mark.parametrize("tp", [dict, set[int], tuple[int, str], Union[int, str], complex])
def test_unsupported_types_are_rejected(tp: object) -> None:
    with pytest.raises(ReflectionError):
        signature_of(tp)


def test_unresolvable_annotation_is_reported() -> None:
    with pytest.raises(ReflectionError, match="Broken"):
        signature_of(Broken)


def test_unresolvable_typeddict_annotation_is_reported() -> None:
    with pytest.raises(ReflectionError, match="BrokenConfig"):
        signature_of(BrokenConfig)


def test_spine_of_dataclass_conforms() -> None:
    spine = spine_of(Point(1, 2.5))

    assert isinstance(spine, SProd)
    assert spine.constructor == "Point"
    assert [item() for item in spine.fields] == [SInt(1), SNumber(2.5)]
    assert is_valid_spine(signature_of(Point), spine)


def test_spine_of_infers_containers_and_none() -> None:
    spine = spine_of([1, "a", None])

    assert isinstance(spine, SArray)
    assert [item() for item in spine.elements] == [SInt(1), SString("a"), S_UNIT]


def test_spine_of_int_for_float_type_widens() -> None:
    assert spine_of(3, float) == SNumber(3.0)


@pytest.mark.parametrize(
    ("value", "tp"),
    [
        ("ab", Char),
        (True, int),
        ("1", int),
        (Point(1, 2.0), Expr),
        (None, Point),
        (Suit.CLUBS, Point),
        ({"path": "p"}, Config),
    ],
)
def test_spine_of_rejects_mismatched_values(value: object, tp: object) -> None:
    with pytest.raises(ReflectionError):
        spine_of(value, tp)


def test_reify_inverts_spine_of() -> None:
    expr = Add(Lit(1), Neg(Lit(2)))
    config: Config = {"path": "/tmp", "retries": 3, "tags": ["a", "b"]}

    assert reify(Expr, spine_of(expr, Expr)) == expr
    assert reify(Point, spine_of(Point(4, -1.0))) == Point(4, -1.0)
    assert reify(Suit, spine_of(Suit.HEARTS)) is Suit.HEARTS
    assert reify(Config, spine_of(config, Config)) == config
    assert reify(Optional[Point], spine_of(None, Optional[Point])) is None
    assert reify(tuple[int, ...], spine_of((1, 2), tuple[int, ...])) == (1, 2)
    assert reify(Char, SChar("q")) == "q"


def test_union_spine_uses_member_name() -> None:
    spine = spine_of(Point(0, 0.0), Optional[Point])

    assert spines_equal(spine, s_prod("Point", [SInt(0), SNumber(0.0)]))
    assert spines_equal(spine_of(None, Optional[Point]), s_prod(NONE_CONSTRUCTOR, []))


@pytest.mark.parametrize(
    ("tp", "spine"),
    [
        (int, SString("1")),
        (Point, s_prod("Other", [SInt(1), SNumber(1.0)])),
        (Point, s_prod("Point", [SInt(1)])),
        (Expr, s_prod("Mul", [])),
        (Suit, s_prod("JOKER", [])),
        (Suit, s_prod("CLUBS", [S_UNIT])),
        (Optional[Point], s_prod("Square", [])),
        (dict, S_UNIT),
    ],
)
def test_reify_rejects_mismatched_spines(tp: object, spine: object) -> None:
    with pytest.raises(ReificationError):
        reify(tp, spine)


def test_sealed_rejects_non_classes() -> None:
    with pytest.raises(TypeError, match="classes"):
        sealed(lambda: None)  # type: ignore[arg-type]
