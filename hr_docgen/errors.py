class UnknownSectionError(ValueError):
    """Raised when navigation targets a section the form does not have."""

    pass


class UnknownFieldError(ValueError):
    """Raised when an edit names a record or field outside the closed field set."""

    pass
