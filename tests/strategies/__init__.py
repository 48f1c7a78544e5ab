"""Hypothesis strategies for utf8validator property-based testing.

Usage:
    from tests.strategies import scalar_values, malformed_sequences
"""

from .utf8 import (
    any_bytes,
    continuation_bytes,
    invalid_lead_bytes,
    malformed_sequences,
    non_continuation_bytes,
    scalar_values,
    surrogate_values,
    utf8_text,
)

__all__ = [
    "any_bytes",
    "continuation_bytes",
    "invalid_lead_bytes",
    "malformed_sequences",
    "non_continuation_bytes",
    "scalar_values",
    "surrogate_values",
    "utf8_text",
]
