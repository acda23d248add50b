"""
Exception hierarchy for Kitz Chef.

Server-side errors (InvalidIngredientsError, GenerationFailedError) are mapped
to fixed HTTP responses by api.main. Client-side persistence errors are raised
by the storage layer and recovered by the history store after logging.
"""


class ChefError(RuntimeError):
    """Base class for all Kitz Chef errors."""


class InvalidIngredientsError(ChefError):
    """The ingredient list is missing, empty, or not a list of strings."""


class GenerationFailedError(ChefError):
    """The text-generation provider failed or returned nothing usable."""


class PersistenceReadError(ChefError):
    """Persisted history data could not be read or parsed."""


class PersistenceWriteError(ChefError):
    """Persisted history data could not be written (e.g. disk full)."""
