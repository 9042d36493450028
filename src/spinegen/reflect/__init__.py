"""Reflection between Python types/values and signatures/spines."""

from spinegen.reflect.introspection import NONE_CONSTRUCTOR, Char, sealed
from spinegen.reflect.signatures import signature_of
from spinegen.reflect.values import reify, spine_of

__all__ = ["NONE_CONSTRUCTOR", "Char", "reify", "sealed", "signature_of", "spine_of"]
