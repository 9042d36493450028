"""Generic generation over signatures: signatures, spines, values, and perturbations."""

from spinegen.generic.arbitrary import g_arbitrary, random_validated_pair
from spinegen.generic.coarbitrary import coarbitrary_spine, g_coarbitrary
from spinegen.generic.signatures import clamp_budget, dedupe, gen_signature
from spinegen.generic.spines import constructor_weight, constructor_weights, draw_spine, gen_spine

__all__ = [
    "clamp_budget",
    "coarbitrary_spine",
    "constructor_weight",
    "constructor_weights",
    "dedupe",
    "draw_spine",
    "g_arbitrary",
    "g_coarbitrary",
    "gen_signature",
    "gen_spine",
    "random_validated_pair",
]
