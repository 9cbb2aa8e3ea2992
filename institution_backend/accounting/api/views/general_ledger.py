"""
PATH: accounting/api/views/general_ledger.py

GENERAL LEDGER API VIEW (READ-ONLY)

GET /api/accounting/general-ledger/?start_date=&end_date=&account=<id>
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiParameter, extend_schema
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
from accounting.services.general_ledger_service import general_ledger


@extend_schema(
    tags=["accounting"],
    parameters=[
        date_query_param("start_date", "Inclusive period start (YYYY-MM-DD)."),
        date_query_param("end_date", "Inclusive period end (YYYY-MM-DD). Defaults to today."),
        OpenApiParameter(
            name="account",
            type=int,
            location=OpenApiParameter.QUERY,
            required=False,
            description="Limit to one Account id.",
        ),
    ],
    responses={200: dict, 400: dict, 403: dict, 503: dict},
)
class GeneralLedgerView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        if not request.user.has_perm(REPORT_VIEW_PERMISSION):
            return forbidden("You do not have permission to view the general ledger.")

        account_id = None
        raw_account = request.query_params.get("account")
        if raw_account not in (None, ""):
            try:
                account_id = int(raw_account)
            except (TypeError, ValueError):
                return Response(
                    {"detail": "account must be an integer"},
                    status=status.HTTP_400_BAD_REQUEST,
                )

        try:
            report = general_ledger(
                start_date=parse_date_param(request, "start_date"),
                end_date=parse_date_param(request, "end_date"),
                account_id=account_id,
            )
        except SERVICE_ERRORS as exc:
            return service_error_response(exc)

        return Response(report.as_dict(), status=status.HTTP_200_OK)
