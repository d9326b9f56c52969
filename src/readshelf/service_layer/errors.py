"""Service-layer error definitions."""

# ============================================================================
#                           General service errors
# ============================================================================


class ServiceError(Exception):
    """Base class for service-layer errors."""


# ============================================================================
#                           User management errors
# ============================================================================


class UserAlreadyExistsError(ServiceError):
    """Raised when a username or email is already taken."""

    def __init__(self, field: str, value: str) -> None:
        super().__init__(f"A user with {field} '{value}' already exists.")
        self.field = field
        self.value = value


class InvalidUserDataError(ServiceError):
    """Raised when user data fails validation (empty username, bad email...)."""


# ============================================================================
#                           Installation errors
# ============================================================================


class InstallError(ServiceError):
    """Raised when a step of the installation cannot complete."""


class RequirementsNotFulfilledError(InstallError):
    """Raised when at least one system requirement check fails."""

    def __init__(self) -> None:
        super().__init__(
            "Some system requirements are not fulfilled. "
            "Please check output messages and fix them."
        )


class SubCommandError(InstallError):
    """Raised when a delegated sub-command fails during installation."""

    def __init__(self, command_name: str, message: str) -> None:
        super().__init__(
            f'The command "{command_name}" generates some errors: \n\n{message}'
        )
        self.command_name = command_name
