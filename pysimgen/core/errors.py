"""
Error taxonomy for generation failures.

All of these are caller errors: they surface immediately and are never
retried inside the generators.
"""

__all__ = [
    "GenerationError",
    "EmptyChoiceSet",
    "DomainExhausted",
    "MalformedInput",
]


class GenerationError(Exception):
    """Base class for all generation failures."""


class EmptyChoiceSet(GenerationError):
    """Selection was requested with no eligible (positive-weight) candidate."""


class DomainExhausted(GenerationError):
    """A strictly bounded value cannot be represented in the column's domain."""

    def __init__(self, message: str, reference=None):
        super().__init__(message)
        self.reference = reference


class MalformedInput(GenerationError, ValueError):
    """Table without columns, or a row whose width does not match the table."""
