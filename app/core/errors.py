"""Domain exceptions and their HTTP rendering."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.core import messages


logger = logging.getLogger("app.errors")


class PromptHubError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = messages.ERROR_INTERNAL_SERVER

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(PromptHubError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = messages.VALIDATION_FAILED


class InvalidArgument(ValidationError):
    pass


class InvalidState(PromptHubError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = messages.PROMPT_NOT_DELETED


class Conflict(PromptHubError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = messages.REG_USERNAME_EXISTS


class InvalidCredentials(PromptHubError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = messages.AUTH_INVALID_CREDENTIALS


class Unauthenticated(PromptHubError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = messages.AUTH_TOKEN_INVALID


class Forbidden(PromptHubError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = messages.ERROR_PERMISSION_DENIED


class NotFound(PromptHubError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = messages.PROMPT_NOT_FOUND


class InternalError(PromptHubError):
    pass


async def _prompthub_error_handler(request: Request, exc: PromptHubError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "message": messages.VALIDATION_FAILED,
            "errors": jsonable_encoder(exc.errors()),
        },
    )


async def _database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("Database error on %s %s", request.method, request.url.path)
    error = InternalError()
    return JSONResponse(status_code=error.status_code, content={"message": error.message})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(PromptHubError, _prompthub_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(SQLAlchemyError, _database_error_handler)
