"""Shape model: signatures, spines, conformance, and validated pairs."""

from spinegen.shapes.pair import ValidatedPair, make_validated_pair
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
    SIG_BOOLEAN,
    SIG_CHAR,
    SIG_INT,
    SIG_NUMBER,
    SIG_STRING,
    SIG_UNIT,
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
    describe_signature,
    sig_array,
    sig_prod,
    sig_record,
)
from spinegen.shapes.spine import (
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
    is_valid_spine,
    s_array,
    s_prod,
    s_record,
    spine_depth,
    spines_equal,
)

__all__ = [
    "SIG_BOOLEAN",
    "SIG_CHAR",
    "SIG_INT",
    "SIG_NUMBER",
    "SIG_STRING",
    "SIG_UNIT",
    "S_UNIT",
    "Constructor",
    "LeafKind",
    "RecordField",
    "SArray",
    "SBoolean",
    "SChar",
    "SInt",
    "SNumber",
    "SProd",
    "SRecord",
    "SString",
    "SUnit",
    "SigArray",
    "SigLeaf",
    "SigProd",
    "SigRecord",
    "Signature",
    "Spine",
    "SpineField",
    "Thunk",
    "ValidatedPair",
    "delay",
    "describe_signature",
    "dump_signature_yaml",
    "dump_spine_yaml",
    "is_valid_spine",
    "load_signature_yaml",
    "load_spine_yaml",
    "make_validated_pair",
    "s_array",
    "s_prod",
    "s_record",
    "sig_array",
    "sig_prod",
    "sig_record",
    "signature_from_data",
    "signature_to_data",
    "spine_depth",
    "spine_from_data",
    "spine_to_data",
    "spines_equal",
]
