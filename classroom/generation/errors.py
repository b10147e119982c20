class GenerationError(ValueError):
    """Content generation failed; the caller keeps whatever it had before."""


class GenerationTimeout(GenerationError):
    pass


class ContentValidationError(GenerationError):
    """The model answered, but nothing usable survived validation."""

    def __init__(self, message: str, raw_text: str = "", errors=None):
        super().__init__(message)
        self.raw_text = raw_text
        self.errors = list(errors or [])
