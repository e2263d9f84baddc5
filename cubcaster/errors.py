"""Error type raised for invalid scenes, maps and arguments."""


class CubError(Exception):
    """A fatal problem with the game's input; the message says what went wrong."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message