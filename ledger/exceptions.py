import logging

from django.db import DatabaseError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = logging.getLogger(__name__)


class LedgerError(Exception):
    """
    Base class for every domain error raised by the ledger services.

    Each subclass carries the HTTP status it maps to so that views never
    need to translate errors themselves.
    """

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Request could not be processed."

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_payload(self) -> dict:
        return {"message": self.message}


# ------------------------------------------------------------------
# 400 - validation
# ------------------------------------------------------------------


class ValidationError(LedgerError):
    default_message = "Invalid request."


class InvalidAmount(ValidationError):
    default_message = "Amount must be greater than zero."


class SameWallet(ValidationError):
    default_message = "Source and destination wallets must be different."


class InvalidCredentials(ValidationError):
    default_message = "Invalid email or password."


# ------------------------------------------------------------------
# 404 - not found
# ------------------------------------------------------------------


class NotFoundError(LedgerError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found."


class ProfileNotFound(NotFoundError):
    default_message = "Profile not found."


class WalletNotFound(NotFoundError):
    default_message = "Wallet not found."


class CategoryNotFound(NotFoundError):
    default_message = "Category not found."


class BudgetNotFound(NotFoundError):
    default_message = "Budget not found."


class EntryNotFound(NotFoundError):
    default_message = "Entry not found."


# ------------------------------------------------------------------
# 409 - conflicts
# ------------------------------------------------------------------


class ConflictError(LedgerError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Resource already exists."


class DuplicateWalletType(ConflictError):
    default_message = "A wallet of this type already exists."


class DuplicateCategory(ConflictError):
    default_message = "A category with this name already exists."


class DuplicateBudget(ConflictError):
    default_message = "A budget already exists for this category."


class DuplicateEmail(ConflictError):
    default_message = "An account with this email already exists."


# ------------------------------------------------------------------
# 401 / 403 - identity and ownership
# ------------------------------------------------------------------


class UnauthenticatedError(LedgerError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Authentication credentials were not provided."


class UnauthorizedError(LedgerError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "You do not have access to this resource."


# ------------------------------------------------------------------
# Balance and lifecycle
# ------------------------------------------------------------------


class InsufficientBalanceError(LedgerError):
    default_message = "Insufficient balance."

    def __init__(self, available, requested, message=None):
        self.available = available
        self.requested = requested
        super().__init__(
            message
            or f"Insufficient balance: available {available}, requested {requested}."
        )

    def to_payload(self) -> dict:
        return {
            "message": self.message,
            "available": str(self.available),
            "requested": str(self.requested),
        }


class InactiveResourceError(LedgerError):
    default_message = "Resource is inactive."


class WalletInactive(InactiveResourceError):
    default_message = "Wallet is inactive."


class AccountInactive(InactiveResourceError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Account is not active. Please activate your account first."


def exception_handler(exc, context):
    """
    DRF exception handler that renders every error as a payload with a
    ``message`` field.

    Ledger errors map to their own status code, DRF errors keep theirs and
    unexpected database failures become a logged 500.
    """
    if isinstance(exc, LedgerError):
        return Response(exc.to_payload(), status=exc.status_code)

    response = drf_exception_handler(exc, context)
    if response is not None:
        data = response.data
        if isinstance(data, dict) and "detail" in data:
            response.data = {"message": str(data["detail"])}
        else:
            response.data = {"message": "Invalid request.", "errors": data}
        return response

    if isinstance(exc, DatabaseError):
        view = context.get("view")
        logger.exception(
            "Database error in %s: %s", view.__class__.__name__ if view else None, exc
        )
        return Response(
            {"message": "An unexpected error occurred. Please try again."},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return None
