class StorageError(Exception):
    """Raised by repositories when the underlying database call fails."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
