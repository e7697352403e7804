"""Exception hierarchy shared by all layers."""


class SharedError(Exception):
    """Base class for roster continuity errors."""


class ExtractionError(SharedError):
    """The PDF decoder could not open or read a document."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Failed to read PDF '{path}': {reason}")
        self.path = path
        self.reason = reason


class EmptyRosterError(SharedError):
    """One of the rosters produced no student rows.

    Usually the PDF is scanned (image only) or uses a different layout.
    """

    def __init__(self, old_count: int, new_count: int):
        super().__init__(
            "Could not extract students from one of the PDFs. "
            f"Old={old_count}, New={new_count}. "
            "Possibly a scanned PDF or a different format."
        )
        self.old_count = old_count
        self.new_count = new_count


__all__ = ["SharedError", "ExtractionError", "EmptyRosterError"]
