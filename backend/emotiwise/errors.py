"""Exception types shared by the store, the mentor service and the server."""


class EmotiWiseError(Exception):
    """Base class for errors raised by EmotiWise code."""


class EntryNotFoundError(EmotiWiseError):
    """Journal entry does not exist or belongs to another user."""

    def __init__(self, entry_id: int):
        super().__init__(f"Journal entry {entry_id} not found or access denied")
        self.entry_id = entry_id


class TextGenerationError(EmotiWiseError):
    """The text-generation collaborator failed, timed out or returned garbage."""
