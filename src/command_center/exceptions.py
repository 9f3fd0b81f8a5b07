"""Custom exception hierarchy for the command center."""


class CommandCenterError(Exception):
    """Base exception for all command center errors."""


class ConfigurationError(CommandCenterError):
    """A required setting (such as the completion credential) is missing."""


class BadRequestError(CommandCenterError):
    """Request body or parameters are malformed."""


class FixtureError(CommandCenterError):
    """A fixture file is missing or cannot be parsed."""


class NotFoundError(CommandCenterError):
    """A record looked up by id does not exist."""


class CompletionError(CommandCenterError):
    """The completion service call failed."""
