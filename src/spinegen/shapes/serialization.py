"""
spinegen — plain-data and YAML encoding for signatures and spines

File: src/spinegen/shapes/serialization.py

Purpose
- Let users declare shapes (including recursive products) in YAML files.
- Render generated spines for failure reports and logs, and replay them.

Format
- Leaf signatures are bare strings: ``number``, ``integer``, ``string`` ...
- ``{"array": <sig>}``
- ``{"record": [{"label": str, "value": <sig>}, ...]}``
- ``{"product": name, "constructors": [{"name": str, "fields": [<sig>, ...]}]}``
- ``{"ref": name}`` refers to the innermost enclosing product called ``name``.
  It may stand for any nested signature: an array element, a record value or a
  constructor field.

Spines use ``{"<leaf kind>": value}``, ``"unit"``, ``{"array": [...]}``,
``{"record": [{"label", "value"}]}`` and ``{"constructor": name, "fields": [...]}``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Final

import yaml

from spinegen.errors import ShapeFormatError
from spinegen.shapes.signature import (
    Constructor,
    LeafKind,
    RecordField,
    SigArray,
    SigLeaf,
    SigProd,
    SigRecord,
    Signature,
    Thunk,
    delay,
)
from spinegen.shapes.spine import (
    LEAF_SPINE_TYPES,
    S_UNIT,
    SArray,
    SBoolean,
    SChar,
    SInt,
    SNumber,
    SProd,
    SRecord,
    SString,
    SUnit,
    Spine,
    SpineField,
)

_LEAF_KINDS: Final[dict[str, LeafKind]] = {kind.value: kind for kind in LeafKind}
_SPINE_LEAF_KINDS: Final[dict[type, LeafKind]] = {
    spine_type: kind for kind, spine_type in LEAF_SPINE_TYPES.items()
}

_OpenProducts = tuple[tuple[str, SigProd], ...]
_Scope = tuple[tuple[str, list[SigProd]], ...]


def signature_to_data(sig: Signature) -> Any:
    """Convert a signature to plain data; recursion becomes ``{"ref": name}``."""

    return _signature_to_data(sig, ())


def _signature_to_data(sig: Signature, open_products: _OpenProducts) -> Any:
    if isinstance(sig, SigLeaf):
        return sig.kind.value
    if isinstance(sig, SigArray):
        return {"array": _signature_to_data(sig.element(), open_products)}
    if isinstance(sig, SigRecord):
        return {
            "record": [
                {"label": field.label, "value": _signature_to_data(field.value(), open_products)}
                for field in sig.fields
            ]
        }
    if isinstance(sig, SigProd):
        for name, product in reversed(open_products):
            if product is sig:
                return {"ref": sig.type_name}
            if name == sig.type_name:
                break
        if any(product is sig for _, product in open_products):
            raise ShapeFormatError(
                f"recursive reference to {sig.type_name!r} is shadowed by a nested product "
                "with the same name"
            )
        inner = (*open_products, (sig.type_name, sig))
        return {
            "product": sig.type_name,
            "constructors": [
                {
                    "name": constructor.name,
                    "fields": [_signature_to_data(item(), inner) for item in constructor.fields],
                }
                for constructor in sig.constructors
            ],
        }
    raise TypeError(f"not a signature: {type(sig).__name__}")


def signature_from_data(data: object) -> Signature:
    """Build a signature from the plain-data form."""

    return _signature_from_data(data, (), "<root>")


def _signature_from_data(data: object, scope: _Scope, path: str) -> Signature:
    if isinstance(data, str):
        kind = _LEAF_KINDS.get(data)
        if kind is None:
            raise ShapeFormatError(f"{path}: unknown leaf kind {data!r}")
        return SigLeaf(kind)
    if not isinstance(data, Mapping):
        raise ShapeFormatError(f"{path}: expected string or mapping, got {type(data).__name__}")

    if "array" in data:
        _expect_keys(data, {"array"}, path)
        return SigArray(_signature_thunk(data["array"], scope, f"{path}.array"))

    if "record" in data:
        _expect_keys(data, {"record"}, path)
        entries = _expect_list(data["record"], f"{path}.record")
        fields: list[RecordField] = []
        for index, entry in enumerate(entries):
            entry_path = f"{path}.record[{index}]"
            if not isinstance(entry, Mapping):
                raise ShapeFormatError(f"{entry_path}: expected mapping")
            _expect_keys(entry, {"label", "value"}, entry_path)
            label = _expect_str(entry["label"], f"{entry_path}.label")
            value = _signature_thunk(entry["value"], scope, f"{entry_path}.value")
            fields.append(RecordField(label, value))
        return SigRecord(tuple(fields))

    if "product" in data:
        _expect_keys(data, {"product", "constructors"}, path)
        type_name = _expect_str(data["product"], f"{path}.product")
        cell: list[SigProd] = []
        inner: _Scope = (*scope, (type_name, cell))
        constructors: list[Constructor] = []
        for index, entry in enumerate(_expect_list(data["constructors"], f"{path}.constructors")):
            entry_path = f"{path}.constructors[{index}]"
            if not isinstance(entry, Mapping):
                raise ShapeFormatError(f"{entry_path}: expected mapping")
            _expect_keys(entry, {"name", "fields"}, entry_path)
            name = _expect_str(entry["name"], f"{entry_path}.name")
            field_thunks = tuple(
                _signature_thunk(item, inner, f"{entry_path}.fields[{position}]")
                for position, item in enumerate(_expect_list(entry["fields"], f"{entry_path}.fields"))
            )
            constructors.append(Constructor(name, field_thunks))
        product = SigProd(type_name, tuple(constructors))
        cell.append(product)
        return product

    if "ref" in data:
        raise ShapeFormatError(f"{path}: 'ref' must be nested inside the product it names")

    raise ShapeFormatError(f"{path}: unrecognised signature keys {sorted(map(str, data))}")


def _signature_thunk(data: object, scope: _Scope, path: str) -> Thunk[Signature]:
    if isinstance(data, Mapping) and "ref" in data:
        _expect_keys(data, {"ref"}, path)
        target = _expect_str(data["ref"], f"{path}.ref")
        for name, cell in reversed(scope):
            if name == target:
                return lambda: cell[0]
        raise ShapeFormatError(f"{path}: reference to unknown product {target!r}")
    return delay(_signature_from_data(data, scope, path))


def spine_to_data(spine: Spine) -> Any:
    """Convert a spine to plain data, forcing every thunk."""

    if isinstance(spine, SUnit):
        return "unit"
    if isinstance(spine, SArray):
        return {"array": [spine_to_data(element()) for element in spine.elements]}
    if isinstance(spine, SRecord):
        return {
            "record": [
                {"label": field.label, "value": spine_to_data(field.value())}
                for field in spine.fields
            ]
        }
    if isinstance(spine, SProd):
        return {
            "constructor": spine.constructor,
            "fields": [spine_to_data(item()) for item in spine.fields],
        }
    kind = _SPINE_LEAF_KINDS.get(type(spine))
    if kind is None:
        raise TypeError(f"not a spine: {type(spine).__name__}")
    return {kind.value: spine.value}


def spine_from_data(data: object, path: str = "<root>") -> Spine:
    """Build a spine from the plain-data form."""

    if data == "unit":
        return S_UNIT
    if not isinstance(data, Mapping):
        raise ShapeFormatError(f"{path}: expected 'unit' or mapping, got {type(data).__name__}")

    if "array" in data:
        _expect_keys(data, {"array"}, path)
        items = _expect_list(data["array"], f"{path}.array")
        return SArray(
            tuple(delay(spine_from_data(item, f"{path}.array[{i}]")) for i, item in enumerate(items))
        )
    if "record" in data:
        _expect_keys(data, {"record"}, path)
        fields: list[SpineField] = []
        for index, entry in enumerate(_expect_list(data["record"], f"{path}.record")):
            entry_path = f"{path}.record[{index}]"
            if not isinstance(entry, Mapping):
                raise ShapeFormatError(f"{entry_path}: expected mapping")
            _expect_keys(entry, {"label", "value"}, entry_path)
            label = _expect_str(entry["label"], f"{entry_path}.label")
            fields.append(SpineField(label, delay(spine_from_data(entry["value"], f"{entry_path}.value"))))
        return SRecord(tuple(fields))
    if "constructor" in data:
        _expect_keys(data, {"constructor", "fields"}, path)
        name = _expect_str(data["constructor"], f"{path}.constructor")
        items = _expect_list(data["fields"], f"{path}.fields")
        return SProd(
            name,
            tuple(delay(spine_from_data(item, f"{path}.fields[{i}]")) for i, item in enumerate(items)),
        )

    if len(data) != 1:
        raise ShapeFormatError(f"{path}: unrecognised spine keys {sorted(map(str, data))}")
    ((key, value),) = data.items()
    return _leaf_spine(str(key), value, path)


def _leaf_spine(key: str, value: object, path: str) -> Spine:
    kind = _LEAF_KINDS.get(key)
    if kind is None or kind is LeafKind.UNIT:
        raise ShapeFormatError(f"{path}: unknown spine kind {key!r}")
    if kind is LeafKind.BOOLEAN and isinstance(value, bool):
        return SBoolean(value)
    if kind is LeafKind.INTEGER and isinstance(value, int) and not isinstance(value, bool):
        return SInt(value)
    if kind is LeafKind.NUMBER and isinstance(value, (int, float)) and not isinstance(value, bool):
        return SNumber(float(value))
    if kind is LeafKind.STRING and isinstance(value, str):
        return SString(value)
    if kind is LeafKind.CHARACTER and isinstance(value, str) and len(value) == 1:
        return SChar(value)
    raise ShapeFormatError(f"{path}: invalid {kind.value} value {value!r}")


def dump_signature_yaml(sig: Signature) -> str:
    return yaml.safe_dump(signature_to_data(sig), sort_keys=False, allow_unicode=True)


def load_signature_yaml(text: str) -> Signature:
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ShapeFormatError(f"invalid YAML: {exc}") from exc
    return signature_from_data(loaded)


def dump_spine_yaml(spine: Spine) -> str:
    return yaml.safe_dump(spine_to_data(spine), sort_keys=False, allow_unicode=True)


def load_spine_yaml(text: str) -> Spine:
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ShapeFormatError(f"invalid YAML: {exc}") from exc
    return spine_from_data(loaded)


def _expect_keys(data: Mapping[Any, Any], allowed: set[str], path: str) -> None:
    keys = {str(key) for key in data}
    unknown = sorted(keys - allowed)
    if unknown:
        raise ShapeFormatError(f"{path}: unexpected fields: {unknown}")
    missing = sorted(allowed - keys)
    if missing:
        raise ShapeFormatError(f"{path}: missing required fields: {missing}")


def _expect_list(value: object, path: str) -> list[Any]:
    if not isinstance(value, list):
        raise ShapeFormatError(f"{path}: expected list, got {type(value).__name__}")
    return value


def _expect_str(value: object, path: str) -> str:
    if not isinstance(value, str):
        raise ShapeFormatError(f"{path}: expected string, got {type(value).__name__}")
    return value


__all__ = [
    "dump_signature_yaml",
    "dump_spine_yaml",
    "load_signature_yaml",
    "load_spine_yaml",
    "signature_from_data",
    "signature_to_data",
    "spine_from_data",
    "spine_to_data",
]
