"""Router configuration.

RouterConfig is a frozen dataclass — immutable after creation,
IDE-autocompletable, no string-key dict lookups.
"""

from dataclasses import dataclass

from argroute.errors import ConfigurationError

# Two bits per segment in a 64-bit rank.
DEFAULT_MAX_SEGMENTS = 32


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Router configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = RouterConfig(help_header="Commands:", color=False)
    """

    # Matching
    max_segments: int = DEFAULT_MAX_SEGMENTS

    # Help listing
    help_header: str = "Available commands:"
    empty_help: str = "No commands registered."
    color: bool | None = None  # None = detect from the output stream

    def validate(self) -> None:
        """Raise ``ConfigurationError`` if the configuration is unusable."""
        if self.max_segments < 1:
            msg = f"max_segments must be positive, got {self.max_segments}"
            raise ConfigurationError(msg)
