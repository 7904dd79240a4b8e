"""Error types raised by the terrain synthesis core."""


class InvalidParameter(ValueError):
    """
    Raised when an input violates a precondition of the synthesizer.

    The offending field is kept on the exception so callers (and the API)
    can report it without parsing the message.
    """

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")
