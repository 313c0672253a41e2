"""Custom exceptions for flagdoc."""


class FlagdocError(Exception):
    """Base exception for flagdoc operations."""


class FlagRegistrationError(FlagdocError):
    """Error while registering CLI flags against a configuration."""


class ConfigStructureError(FlagdocError):
    """Configuration model cannot be walked (cycle, unsupported type, too deep)."""


class UnresolvedFlagError(ConfigStructureError):
    """A field has no bound CLI flag while flags are required."""
