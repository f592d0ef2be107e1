class DocumentReadError(ValueError):
    """Raised when an uploaded document cannot be turned into plain text."""

    def __init__(self, kind: str, message: str):
        super().__init__(f"{kind}: {message}")
        self.kind = kind
        self.message = message
