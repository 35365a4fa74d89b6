"""Exceptions raised while resolving Jenkins credentials."""


class JenkinsAuthError(Exception):
    """Base class for all credential resolution failures."""


class ConfigurationError(JenkinsAuthError):
    """Raised when no Jenkins server URL is available."""


class PersistenceError(JenkinsAuthError):
    """Raised when the auth config file cannot be read or written."""


class AuthenticationError(JenkinsAuthError):
    """Raised when no valid credentials could be obtained."""


class InputCancelledError(JenkinsAuthError):
    """Raised when the user aborts an interactive prompt."""
