"""Exception hierarchy for installer failures.

Every failure that aborts an install run derives from StarterError so the CLI
can turn it into a single red error line and a non-zero exit. Settings merging
has no failure kind of its own: conflicts always resolve (local wins, allow
lists union), so only the I/O around the settings file can fail.
"""


class StarterError(Exception):
    """Base class for errors that abort an install run."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class PreconditionFailure(StarterError):
    """A required tool is missing or the target directory is unusable.

    Raised before the target is touched.
    """


class RetrievalFailure(StarterError):
    """The reference snapshot could not be obtained.

    Raised before the target is touched.
    """


class IOFailure(StarterError):
    """Reading from or writing to the target filesystem failed.

    Artifacts copied before the failure stay copied; the revision marker is
    not written, so the next run reconciles again.
    """
