class ValidationError(Exception):
    """Raised when an inbound report or admin command is malformed.

    State is never modified when this is raised.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
