"""Match predicate parsing and evaluation."""
