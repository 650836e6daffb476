from fastapi import status


class AskTrackError(Exception):
    """Базовая ошибка приложения: сообщение для клиента и HTTP-код."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidCredentials(AskTrackError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid credentials"


class InvalidToken(AskTrackError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid token"


class MissingBranchClaim(AskTrackError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Branch not found in token."


class DeviceNotFound(AskTrackError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Device not found for your branch."


class StatusConflict(AskTrackError):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, current_status=None):
        self.current_status = current_status
        super().__init__(message)


class ValidationFailed(AskTrackError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"
