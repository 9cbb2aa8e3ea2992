"""
PATH: accounting/api/views/explain.py

ACCOUNT DRILL-DOWN API VIEW (READ-ONLY)

GET /api/accounting/explain/<account_key>/?as_of_date=2026-03-31

account_key is either an account id or a synthetic key
(synthetic-receivable, synthetic-cash, synthetic-fee-income).
The returned net_balance equals the trial balance row's net for the same date.
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
from accounting.services.drilldown_service import explain_account


@extend_schema(
    tags=["accounting"],
    parameters=[
        date_query_param("as_of_date", "Inclusive cutoff (YYYY-MM-DD). Defaults to today."),
    ],
    responses={200: dict, 400: dict, 403: dict, 404: dict, 503: dict},
)
class ExplainAccountView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request, account_key: str):
        if not request.user.has_perm(REPORT_VIEW_PERMISSION):
            return forbidden("You do not have permission to view ledger activity.")

        try:
            explanation = explain_account(
                account_key, as_of=parse_date_param(request, "as_of_date")
            )
        except SERVICE_ERRORS as exc:
            return service_error_response(exc)

        return Response(explanation.as_dict(), status=status.HTTP_200_OK)
