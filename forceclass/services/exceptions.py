class ClassificationError(Exception):
    """Base class for all classification domain errors."""

class UnknownUnitTypeError(ClassificationError):
    """Raised when a unit summary carries a unit type string outside the known categories."""

class MalformedEncodingError(ClassificationError):
    """Raised in strict mode when a role/constraint encoding holds an unrecognized token."""

class EntityLoadError(ClassificationError):
    """Raised when the full structural definition of a unit cannot be loaded."""

class RepositoryClosedError(ClassificationError):
    """Raised when the unit repository is used outside open()/close()."""

class RecordNotFoundError(ClassificationError):
    """Raised when a unit or chassis key is not present in the catalog."""

    def __init__(self, message: str, key: str = None):
        super().__init__(message)
        self.key = key

class FactionDataError(ClassificationError):
    """Raised when a faction data sheet lacks the columns needed to apply it."""
