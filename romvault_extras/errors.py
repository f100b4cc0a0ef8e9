"""Exception hierarchy for romvault-extras."""


class ExtrasError(Exception):
    """Base exception for conversion errors."""
    pass


class InputFileError(ExtrasError):
    """Input archive is missing, unreadable, not a Zip, or incomplete."""
    pass


class ConversionError(ExtrasError):
    """A source dat could not be rewritten."""
    pass


class MalformedXmlError(ConversionError):
    """Source dat is not well-formed XML."""

    def __init__(self, message: str, position=None):
        self.position = position
        if position is not None:
            line, column = position
            message = f"{message} (line {line}, column {column})"
        super().__init__(message)


class UnterminatedMachineError(ConversionError):
    """Input ended while a machine element was still open."""
    pass


class MissingAttributeError(ConversionError):
    """Required attribute missing on a source element."""
    pass


class OutputError(ExtrasError):
    """Output dat could not be persisted."""
    pass


class DestinationExistsError(OutputError):
    """Output path already exists and will not be overwritten."""
    pass


class WriteError(OutputError):
    """I/O failure while writing the output dat."""
    pass


class EntryReadError(ConversionError):
    """Archive entry could not be decompressed."""
    pass
