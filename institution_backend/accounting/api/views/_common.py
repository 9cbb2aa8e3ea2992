# accounting/api/views/_common.py

"""
Shared helpers for the accounting report / registry views:
- query-string date parsing (YYYY-MM-DD)
- mapping service errors onto HTTP responses
"""

from __future__ import annotations

import logging

from django.core.exceptions import ValidationError
from django.utils.dateparse import parse_date
from drf_spectacular.utils import OpenApiParameter
from rest_framework import status
from rest_framework.response import Response

from accounting.services.exceptions import (
    AccountNotFoundError,
    ReportParameterError,
    SourceUnavailableError,
)

logger = logging.getLogger(__name__)

REPORT_VIEW_PERMISSION = "accounting.view_ledgerentry"


def date_query_param(name: str, description: str) -> OpenApiParameter:
    return OpenApiParameter(
        name=name,
        type=str,
        location=OpenApiParameter.QUERY,
        required=False,
        description=description,
    )


def parse_date_param(request, name: str):
    """
    Returns a date or None when the parameter is absent/blank.
    Raises ReportParameterError on anything that is not YYYY-MM-DD.
    """
    raw = request.query_params.get(name)
    if raw is None or str(raw).strip() == "":
        return None
    try:
        parsed = parse_date(str(raw).strip())
    except ValueError as exc:
        raise ReportParameterError(f"Invalid {name} (expected YYYY-MM-DD)") from exc
    if parsed is None:
        raise ReportParameterError(f"Invalid {name} (expected YYYY-MM-DD)")
    return parsed


def forbidden(message: str) -> Response:
    return Response({"detail": message}, status=status.HTTP_403_FORBIDDEN)


def validation_error_response(exc: ValidationError) -> Response:
    if hasattr(exc, "message_dict"):
        body = exc.message_dict
    else:
        body = {"detail": exc.messages}
    return Response(body, status=status.HTTP_400_BAD_REQUEST)


def service_error_response(exc: Exception) -> Response:
    """
    Map an accounting service error onto a response.
    Unknown exceptions are re-raised.
    """
    if isinstance(exc, ValidationError):
        return validation_error_response(exc)
    if isinstance(exc, ReportParameterError):
        return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
    if isinstance(exc, AccountNotFoundError):
        return Response({"detail": str(exc)}, status=status.HTTP_404_NOT_FOUND)
    if isinstance(exc, SourceUnavailableError):
        logger.warning("Report source unavailable", extra={"error": str(exc)})
        return Response(
            {"detail": "Accounting data is temporarily unavailable.", "retryable": True},
            status=status.HTTP_503_SERVICE_UNAVAILABLE,
        )
    raise exc


SERVICE_ERRORS = (
    ValidationError,
    ReportParameterError,
    AccountNotFoundError,
    SourceUnavailableError,
)
