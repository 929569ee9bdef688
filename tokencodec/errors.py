class TokenAuthError(ValueError):
    """Base class for token and hash-record format errors."""


class MalformedTokenError(TokenAuthError):
    """Token does not have three segments or a segment is not a JSON object."""


class MalformedRecordError(TokenAuthError):
    """Password-hash record is not ``$algorithm.hash.salt``."""
