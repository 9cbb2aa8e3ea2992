"""
PATH: accounting/api/views/balance_sheet.py

BALANCE SHEET API VIEW (READ-ONLY)

GET /api/accounting/balance-sheet/?as_of_date=2026-03-31

- Permission-gated: requires accounting.view_ledgerentry
- Assets = Liabilities + Equity is checked and reported, never raised
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
from accounting.services.financial_statement_service import get_balance_sheet


@extend_schema(
    tags=["accounting"],
    parameters=[
        date_query_param("as_of_date", "Inclusive cutoff (YYYY-MM-DD). Defaults to today."),
    ],
    responses={200: dict, 400: dict, 403: dict, 503: dict},
)
class BalanceSheetView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        if not request.user.has_perm(REPORT_VIEW_PERMISSION):
            return forbidden("You do not have permission to view balance sheet.")

        try:
            sheet = get_balance_sheet(as_of=parse_date_param(request, "as_of_date"))
        except SERVICE_ERRORS as exc:
            return service_error_response(exc)

        return Response(sheet.as_dict(), status=status.HTTP_200_OK)
