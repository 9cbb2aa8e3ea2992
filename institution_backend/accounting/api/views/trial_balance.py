"""
PATH: accounting/api/views/trial_balance.py

TRIAL BALANCE API VIEW (READ-ONLY)

GET /api/accounting/trial-balance/?as_of_date=2026-03-31[&start_date=2026-01-01]

- Permission-gated: requires accounting.view_ledgerentry
- Unbalanced results are still 200, flagged with is_balanced=false + warning
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
from accounting.services.trial_balance_service import TrialBalanceService


@extend_schema(
    tags=["accounting"],
    parameters=[
        date_query_param("as_of_date", "Inclusive cutoff (YYYY-MM-DD). Defaults to today."),
        date_query_param(
            "start_date",
            "Optional period start (YYYY-MM-DD) for an activity-only trial balance.",
        ),
    ],
    responses={200: dict, 400: dict, 403: dict, 503: dict},
)
class TrialBalanceView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        if not request.user.has_perm(REPORT_VIEW_PERMISSION):
            return forbidden("You do not have permission to view trial balance.")

        try:
            as_of = parse_date_param(request, "as_of_date")
            start_date = parse_date_param(request, "start_date")
            tb = TrialBalanceService().generate(as_of=as_of, start_date=start_date)
        except SERVICE_ERRORS as exc:
            return service_error_response(exc)

        return Response(tb.as_dict(), status=status.HTTP_200_OK)
