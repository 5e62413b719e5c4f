class BotError(Exception):
    pass


class ConfigurationError(BotError):
    """Missing or invalid settings. Raised before any state is touched."""


class AuthenticationError(BotError):
    """The social endpoint rejected (or never received) our credentials."""


class PublishError(BotError):
    pass


class SourceError(BotError):
    """A single feed or API could not be fetched or parsed."""


class ClassificationError(BotError):
    """The external sentiment service failed for one headline."""
