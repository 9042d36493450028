"""
spinegen — unit tests for shape serialization

File: tests/unit/shapes/test_shape_serialization.py
Last updated: 2026-10-19

Purpose
- Validate the plain-data and YAML forms of signatures and spines.

What this test file should cover
- Recursive products encoded with refs and rebuilt as self-referential thunks.
- Actionable ShapeFormatError messages for malformed documents.
- Spine replay from YAML.
"""

from __future__ import annotations

from dataclasses import dataclass

import pytest

from spinegen.errors import ShapeFormatError
from spinegen.gen.core import generate
from spinegen.generic.spines import gen_spine
from spinegen.reflect import signature_of
from spinegen.shapes.serialization import (
    dump_signature_yaml,
    dump_spine_yaml,
    load_signature_yaml,
    load_spine_yaml,
    signature_from_data,
    signature_to_data,
    spine_from_data,
    spine_to_data,
)
from spinegen.shapes.signature import (
    SIG_INT,
    SIG_NUMBER,
    SIG_STRING,
    SIG_UNIT,
    SigArray,
    SigProd,
    sig_array,
    sig_prod,
    sig_record,
)
from spinegen.shapes.spine import (
    S_UNIT,
    SBoolean,
    SChar,
    SInt,
    SNumber,
    SString,
    is_valid_spine,
    s_array,
    s_prod,
    s_record,
    spines_equal,
)

pytestmark = pytest.mark.unit

INT_LIST_YAML = """
product: IntList
constructors:
  - name: Nil
    fields: []
  - name: Cons
    fields:
      - integer
      - ref: IntList
"""


@dataclass(frozen=True)
class Rose:
    label: int
    children: list[Rose]


def _int_list() -> SigProd:
    holder: list[SigProd] = []
    sig = sig_prod("IntList", [("Nil", []), ("Cons", [SIG_INT, lambda: holder[0]])])
    holder.append(sig)
    return sig


def test_leaf_and_record_signatures_encode_as_plain_data() -> None:
    sig = sig_record([("a", SIG_NUMBER), ("b", sig_array(SIG_STRING)), ("c", SIG_UNIT)])

    assert signature_to_data(sig) == {
        "record": [
            {"label": "a", "value": "number"},
            {"label": "b", "value": {"array": "string"}},
            {"label": "c", "value": "unit"},
        ]
    }


def test_recursive_product_encodes_back_edge_as_ref() -> None:
    data = signature_to_data(_int_list())

    assert data == {
        "product": "IntList",
        "constructors": [
            {"name": "Nil", "fields": []},
            {"name": "Cons", "fields": ["integer", {"ref": "IntList"}]},
        ],
    }


def test_loaded_recursive_signature_refers_to_itself() -> None:
    sig = load_signature_yaml(INT_LIST_YAML)

    assert isinstance(sig, SigProd)
    cons = sig.constructor("Cons")
    assert cons is not None
    assert cons.fields[1]() is sig
    assert signature_to_data(sig) == signature_to_data(_int_list())


def test_spines_for_loaded_signature_conform_to_both_encodings() -> None:
    loaded = load_signature_yaml(dump_signature_yaml(_int_list()))

    for seed in range(25):
        spine = generate(gen_spine(loaded), seed=seed)
        assert is_valid_spine(loaded, spine)
        assert is_valid_spine(_int_list(), spine)


def test_ref_resolves_to_innermost_enclosing_product() -> None:
    sig = signature_from_data(
        {
            "product": "T",
            "constructors": [
                {
                    "name": "Outer",
                    "fields": [
                        {
                            "product": "T",
                            "constructors": [
                                {"name": "Inner", "fields": [{"ref": "T"}]},
                                {"name": "Stop", "fields": []},
                            ],
                        }
                    ],
                }
            ],
        }
    )

    assert isinstance(sig, SigProd)
    inner = sig.constructors[0].fields[0]()
    assert isinstance(inner, SigProd)
    assert inner is not sig
    assert inner.constructors[0].fields[0]() is inner


def test_shadowed_back_reference_cannot_be_encoded() -> None:
    outer_holder: list[SigProd] = []
    inner = sig_prod("T", [("I", [lambda: outer_holder[0]])])
    outer = sig_prod("T", [("O", [inner]), ("Stop", [])])
    outer_holder.append(outer)

    with pytest.raises(ShapeFormatError, match="shadowed"):
        signature_to_data(outer)


@pytest.mark.parametrize(
    ("data", "message"),
    [
        ("decimal", "unknown leaf kind"),
        (42, "expected string or mapping"),
        ({"ref": "T"}, "must be nested inside the product"),
        ({"array": {"ref": "T"}}, "unknown product"),
        ({"array": "integer", "extra": 1}, "unexpected fields"),
        ({"record": [{"label": "a"}]}, "missing required fields"),
        ({"product": "T", "constructors": [{"name": "A", "fields": [{"ref": "U"}]}]}, "unknown product"),
        ({"product": "T", "constructors": {"name": "A"}}, "expected list"),
        ({"tuple": []}, "unrecognised signature keys"),
    ],
)
def test_malformed_signature_data_is_rejected(data: object, message: str) -> None:
    with pytest.raises(ShapeFormatError, match=message):
        signature_from_data(data)


def test_invalid_yaml_is_reported_as_shape_format_error() -> None:
    with pytest.raises(ShapeFormatError, match="invalid YAML"):
        load_signature_yaml("record: [")
    with pytest.raises(ShapeFormatError, match="invalid YAML"):
        load_spine_yaml("array: [")


def test_spine_plain_data_form() -> None:
    spine = s_record(
        [
            ("flag", SBoolean(True)),
            ("items", s_array([SInt(1), SNumber(2.5)])),
            ("node", s_prod("Leaf", [SChar("x"), SString("yz"), S_UNIT])),
        ]
    )

    assert spine_to_data(spine) == {
        "record": [
            {"label": "flag", "value": {"boolean": True}},
            {"label": "items", "value": {"array": [{"integer": 1}, {"number": 2.5}]}},
            {
                "label": "node",
                "value": {
                    "constructor": "Leaf",
                    "fields": [{"character": "x"}, {"string": "yz"}, "unit"],
                },
            },
        ]
    }


def test_generated_spine_replays_from_yaml() -> None:
    sig = _int_list()
    spine = generate(gen_spine(sig), seed=2024, size=6)

    replayed = load_spine_yaml(dump_spine_yaml(spine))

    assert spines_equal(spine, replayed)
    assert is_valid_spine(sig, replayed)


@pytest.mark.parametrize(
    ("data", "message"),
    [
        ({"integer": "7"}, "invalid integer value"),
        ({"integer": True}, "invalid integer value"),
        ({"character": "ab"}, "invalid character value"),
        ({"unit": None}, "unknown spine kind"),
        ({"decimal": 1}, "unknown spine kind"),
        ([1, 2], "expected 'unit' or mapping"),
        ({"constructor": "A"}, "missing required fields"),
    ],
)
def test_malformed_spine_data_is_rejected(data: object, message: str) -> None:
    with pytest.raises(ShapeFormatError, match=message):
        spine_from_data(data)


def test_recursion_through_an_array_reads_back() -> None:
    original = signature_of(Rose)

    loaded = load_signature_yaml(dump_signature_yaml(original))

    assert isinstance(loaded, SigProd)
    children = loaded.constructors[0].fields[1]()
    assert isinstance(children, SigArray)
    assert children.element() is loaded
    assert signature_to_data(loaded) == signature_to_data(original)
    for seed in range(10):
        spine = generate(gen_spine(loaded), seed=seed, size=1)
        assert is_valid_spine(original, spine)


def test_recursion_through_a_record_reads_back() -> None:
    data = {
        "product": "Chain",
        "constructors": [
            {"name": "End", "fields": []},
            {"name": "Link", "fields": [{"record": [{"label": "next", "value": {"ref": "Chain"}}]}]},
        ],
    }

    sig = signature_from_data(data)

    assert isinstance(sig, SigProd)
    record = sig.constructors[1].fields[0]()
    assert record.fields[0].value() is sig
    assert signature_to_data(sig) == data
