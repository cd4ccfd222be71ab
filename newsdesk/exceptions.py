"""Typed exceptions for the newsroom."""


class NewsdeskError(Exception):
    """Base exception for newsroom errors."""
    pass


class GenerationFailedError(NewsdeskError):
    """Article generation failed.

    The message is short and safe to show to a reader; the underlying
    cause is chained via ``__cause__`` and only written to the log.
    """
    pass


class CredentialSelectionError(NewsdeskError):
    """Interactive credential selection could not start or was cancelled."""
    pass
