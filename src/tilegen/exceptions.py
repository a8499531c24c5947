"""Custom exceptions for map generation."""


class TileGenError(Exception):
    """Base exception for generator errors."""

    pass


class InvalidInputError(TileGenError):
    """Raised when a generation request has no map or a degenerate size."""

    pass


class GenerationCancelled(TileGenError):
    """Raised when the progress callback asks to stop."""

    def __init__(self, progress: int):
        super().__init__(f"Generation cancelled at {progress}%")
        self.progress = progress
