"""Custom exception classes for ssv-deployments."""


class DeploymentError(Exception):
    """Base exception for deployment-related errors."""

    pass


class InvalidModuleError(DeploymentError, ValueError):
    """Raised when a requested module name is not a known SSV module."""

    pass


class BuildError(DeploymentError, RuntimeError):
    """Raised when contract compilation fails."""

    pass


class BuildArtifactNotFoundError(BuildError, FileNotFoundError):
    """Raised when no compiled artifact exists for a contract name."""

    pass


class TransactionError(DeploymentError, RuntimeError):
    """Raised when a transaction cannot be submitted, confirmed, or reverts."""

    pass


class ConfigurationError(DeploymentError, ValueError):
    """Raised when a required network or environment parameter is missing or malformed."""

    pass
