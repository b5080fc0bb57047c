# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Error taxonomy shared by the record store, the credential service and the
authorization policy.

None of these know anything about HTTP.  ``main.py`` maps each class to a
status code in exactly one place.
"""


class ChirpyError(Exception):
    """Base class for every expected failure raised by the core."""


class NotFoundError(ChirpyError):
    """An id or email is absent from its table."""


class ConflictError(ChirpyError):
    """A unique field (user email) is already taken."""


class ForbiddenError(ChirpyError):
    """The caller is authenticated but does not own the record."""


class FormatError(ChirpyError):
    """Persisted bytes could not be decoded into a table."""


class AuthInvalidError(ChirpyError):
    """Token is tampered, malformed, expired, or credentials are wrong."""


class UnauthenticatedError(AuthInvalidError):
    """No usable Authorization material was presented at all."""


class PersistenceError(ChirpyError):
    """
    Writing the snapshot to disk failed.

    The in-memory table has already been mutated when this is raised; the
    caller may retry the write with ``Database.persist_chirps`` /
    ``Database.persist_users``.
    """


class TokenConfigError(ChirpyError):
    """Tokens cannot be issued because no signing secret is configured."""


class InvalidRecordError(ChirpyError):
    """A record failed its schema, e.g. a chirp body over 140 characters."""
