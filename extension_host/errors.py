"""
Extension host exceptions.
"""


class ExtensionHostError(Exception):
    """Base class for extension host errors."""


class ConfigError(ExtensionHostError):
    """Host configuration could not be read or is invalid."""


class ExtensionTestRunnerError(ExtensionHostError):
    """The configured extension test runner could not be loaded or run."""
