"""Exceptions raised by the share code codec."""


class PacktError(ValueError):
    """Base class for codec errors."""


class DecodeError(PacktError):
    """Raised when a share code cannot be decoded."""


class CompressionBudgetError(PacktError):
    """Raised when no strategy fits the requested character budget."""

    def __init__(self, kind: str, max_chars: int):
        self.kind = kind
        self.max_chars = max_chars
        super().__init__(
            f"Cannot compress {kind} to {max_chars} characters. "
            f"Try a higher limit or remove constraints."
        )
