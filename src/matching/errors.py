"""Errors raised while building a match predicate."""


class SpecSyntaxError(ValueError):
    """Raised when a match option value cannot be parsed."""


class EmptyPredicateError(ValueError):
    """Raised when no match option was supplied at all."""
