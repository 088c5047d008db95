"""Exception hierarchy for fzfpick."""


class FzfpickError(Exception):
    """Base class for errors reported to the user."""


class SpawnError(FzfpickError):
    """The finder executable is missing or could not be executed."""


class InvalidDirectory(FzfpickError):
    """A session was asked to run in a directory that does not exist."""


class SessionBusy(FzfpickError):
    """A launcher was asked to start a session while another is still running."""


class ConfigError(FzfpickError):
    """The configuration file could not be read or failed validation."""


class InvalidEntries(FzfpickError, ValueError):
    """Literal entries cannot be handed to the finder as given."""
