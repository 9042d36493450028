"""Random generator primitives: sized generators, leaves, and perturbations."""

from spinegen.gen.core import (
    Gen,
    Source,
    choose_int,
    constant,
    delay,
    elements,
    frequency,
    generate,
    list_of,
    non_empty_list_of,
    one_of,
    resize,
    sample,
    sized,
    weighted_index,
)
from spinegen.gen.leaves import (
    arbitrary_bool,
    arbitrary_char,
    arbitrary_int,
    arbitrary_number,
    arbitrary_string,
    coarbitrary_bool,
    coarbitrary_char,
    coarbitrary_int,
    coarbitrary_number,
    coarbitrary_string,
)
from spinegen.gen.perturbation import Perturbation

__all__ = [
    "Gen",
    "Perturbation",
    "Source",
    "arbitrary_bool",
    "arbitrary_char",
    "arbitrary_int",
    "arbitrary_number",
    "arbitrary_string",
    "choose_int",
    "coarbitrary_bool",
    "coarbitrary_char",
    "coarbitrary_int",
    "coarbitrary_number",
    "coarbitrary_string",
    "constant",
    "delay",
    "elements",
    "frequency",
    "generate",
    "list_of",
    "non_empty_list_of",
    "one_of",
    "resize",
    "sample",
    "sized",
    "weighted_index",
]
