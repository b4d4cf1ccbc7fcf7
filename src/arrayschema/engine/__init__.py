"""Recursive validation engine."""

from arrayschema.engine.validator import Validator

__all__ = ["Validator"]
