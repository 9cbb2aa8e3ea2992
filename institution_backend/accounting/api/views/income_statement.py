"""
PATH: accounting/api/views/income_statement.py

INCOME STATEMENT API VIEW (READ-ONLY)

GET /api/accounting/income-statement/?start_date=2026-01-01&end_date=2026-03-31

- Permission-gated: requires accounting.view_ledgerentry
- start_date omitted -> from the first posting; end_date omitted -> today
"""

from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from accounting.api.views._common import (
    REPORT_VIEW_PERMISSION,
    SERVICE_ERRORS,
    date_query_param,
    forbidden,
    parse_date_param,
    service_error_response,
)
from accounting.services.financial_statement_service import get_income_statement


@extend_schema(
    tags=["accounting"],
    parameters=[
        date_query_param("start_date", "Inclusive period start (YYYY-MM-DD)."),
        date_query_param("end_date", "Inclusive period end (YYYY-MM-DD). Defaults to today."),
    ],
    responses={200: dict, 400: dict, 403: dict, 503: dict},
)
class IncomeStatementView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        if not request.user.has_perm(REPORT_VIEW_PERMISSION):
            return forbidden("You do not have permission to view the income statement.")

        try:
            statement = get_income_statement(
                start_date=parse_date_param(request, "start_date"),
                end_date=parse_date_param(request, "end_date"),
            )
        except SERVICE_ERRORS as exc:
            return service_error_response(exc)

        return Response(statement.as_dict(), status=status.HTTP_200_OK)
