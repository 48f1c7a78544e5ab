"""Scanner configuration.

Provides a single frozen dataclass that encapsulates the parameters of a
host-side scan: how the input is read, when to stop, and how errors are
rendered. The validation core itself takes no configuration.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass

from utf8validator.constants import DEFAULT_CHUNK_SIZE
from utf8validator.diagnostics.formatter import DiagnosticFormatter, OutputFormat

__all__ = ["ScanConfig"]


@dataclass(frozen=True, slots=True)
class ScanConfig:
    """Immutable configuration for scanner.scan() and the CLI.

    All fields have sensible defaults; ``ScanConfig()`` scans the whole
    input and reports every error in Rust-style format.

    Attributes:
        chunk_size: Bytes requested per read from a binary stream
            (default: 64 KiB).
        max_errors: Stop after this many errors (default: None, unlimited).
            ``max_errors=1`` gives fail-fast behavior.
        output_format: Diagnostic rendering style (default: rust).
        color: Emit ANSI colors in rust-style output (default: False).
        sanitize: Truncate long hint/message text (default: False).

    Example:
        >>> config = ScanConfig(max_errors=1, output_format=OutputFormat.JSON)
        >>> config.formatter().output_format
        <OutputFormat.JSON: 'json'>
    """

    chunk_size: int = DEFAULT_CHUNK_SIZE
    max_errors: int | None = None
    output_format: OutputFormat = OutputFormat.RUST
    color: bool = False
    sanitize: bool = False

    def __post_init__(self) -> None:
        """Validate configuration values at construction time.

        Raises:
            ValueError: If chunk_size or max_errors is not positive, or
                output_format is not a known format name.
        """
        if self.chunk_size <= 0:
            msg = "chunk_size must be positive"
            raise ValueError(msg)
        if self.max_errors is not None and self.max_errors <= 0:
            msg = "max_errors must be positive"
            raise ValueError(msg)
        # Accept plain strings ("json") from argparse or callers
        object.__setattr__(self, "output_format", OutputFormat(self.output_format))

    def formatter(self) -> DiagnosticFormatter:
        """Build the DiagnosticFormatter described by this configuration."""
        return DiagnosticFormatter(
            output_format=self.output_format,
            color=self.color,
            sanitize=self.sanitize,
        )
