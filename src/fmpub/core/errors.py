"""Front-matter parse errors, one class per failure mode"""


class ParseError(ValueError):
    """Base class for all document parse failures.

    path is attached by parse_file (or by the caller) so batch reports can
    name the offending file.
    """

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.message = message
        self.path = path

    def __str__(self) -> str:
        return f"{self.path}: {self.message}" if self.path else self.message


class UnterminatedMetadataBlock(ParseError):
    """Opening '---' found but no closing '---' before end of input."""

    def __init__(self, path: str | None = None):
        super().__init__("metadata block is not terminated by a closing '---' line", path)


class MalformedMetadataSyntax(ParseError):
    """The text between the sentinels is not a valid key/value mapping."""


class MissingMetadataBlock(MalformedMetadataSyntax):
    """The document does not start with an opening '---' line."""

    def __init__(self, path: str | None = None):
        super().__init__("document must start with a '---' metadata block", path)


class MissingRequiredField(ParseError):

    def __init__(self, key: str, path: str | None = None):
        super().__init__(f"missing required field '{key}'", path)
        self.key = key


class InvalidFieldValue(ParseError):

    def __init__(self, key: str, reason: str, path: str | None = None):
        super().__init__(f"invalid value for '{key}': {reason}", path)
        self.key = key
        self.reason = reason
