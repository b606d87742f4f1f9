"""Hymod input validation error."""


class HymodInputError(ValueError):
    """Raised when kernel inputs violate the calling contract.

    Covers malformed shapes (cascade buffers shorter than the cascade length,
    shared output buffers) and out-of-domain values (negative input flux,
    storage above capacity). Raised before any computation takes place.
    """
