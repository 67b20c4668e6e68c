"""Conversion of request records into query parameters."""

from bggapi.serialization.params import ParamKind, field_plan, serialize

__all__ = ["ParamKind", "field_plan", "serialize"]
