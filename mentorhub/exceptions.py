"""
Application error hierarchy.

Every error carries the HTTP status it maps to and a user-facing message;
the handlers in ``mentorhub.main`` render them as the standard
``{success: false, message}`` envelope.
"""
from typing import Dict, Optional

from fastapi import HTTPException, status


class AppError(HTTPException):
    """Base error for the MentorHub API"""

    def __init__(
        self,
        status_code: int,
        message: str,
        headers: Optional[Dict[str, str]] = None,
    ):
        super().__init__(status_code=status_code, detail=message, headers=headers)
        self.message = message


class ValidationError(AppError):
    """Missing or malformed input"""

    def __init__(self, message: str = "Dados inválidos"):
        super().__init__(status.HTTP_400_BAD_REQUEST, message)


class AuthenticationError(AppError):
    """Missing, invalid or expired bearer token"""

    def __init__(self, message: str = "Token inválido ou expirado"):
        super().__init__(
            status.HTTP_401_UNAUTHORIZED,
            message,
            headers={"WWW-Authenticate": "Bearer"},
        )


class AuthorizationError(AppError):
    """Role or ownership mismatch"""

    def __init__(self, message: str = "Sem permissão"):
        super().__init__(status.HTTP_403_FORBIDDEN, message)


class NotFoundError(AppError):
    def __init__(self, message: str):
        super().__init__(status.HTTP_404_NOT_FOUND, message)


class ConflictError(AppError):
    """Business-rule violation: duplicates, capacity, active-session guards.

    Reported as 400 to keep the public contract of the REST API.
    """

    def __init__(self, message: str):
        super().__init__(status.HTTP_400_BAD_REQUEST, message)


class InternalError(AppError):
    def __init__(self, message: str = "Erro interno do servidor"):
        super().__init__(status.HTTP_500_INTERNAL_SERVER_ERROR, message)
