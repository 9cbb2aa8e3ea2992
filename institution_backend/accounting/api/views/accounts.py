# accounting/api/views/accounts.py

"""
PATH: accounting/api/views/accounts.py

CHART OF ACCOUNTS API

GET   /api/accounting/accounts/                       list (filters, search)
POST  /api/accounting/accounts/                       create
GET   /api/accounting/accounts/<id>/                  retrieve
PATCH /api/accounting/accounts/<id>/                  partial update
POST  /api/accounting/accounts/<id>/set-active/       activate / deactivate
GET   /api/accounting/accounts/<id>/children/         direct children
GET   /api/accounting/accounts/default-normal-balance/?account_type=ASSET

Permissions:
- read:   accounting.view_account
- create: accounting.add_account
- edit:   accounting.change_account

All writes go through accounting.services.account_registry.
"""

from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.generics import GenericAPIView
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from accounting.api.filters import AccountFilter
from accounting.api.serializers.accounts import (
    AccountSerializer,
    AccountWriteSerializer,
    SetActiveSerializer,
)
from accounting.api.views._common import SERVICE_ERRORS, forbidden, service_error_response
from accounting.models.account import Account
from accounting.models.choices import AccountType
from accounting.services import account_registry

ACCOUNT_VIEW_PERMISSION = "accounting.view_account"
ACCOUNT_ADD_PERMISSION = "accounting.add_account"
ACCOUNT_CHANGE_PERMISSION = "accounting.change_account"


class AccountListCreateView(GenericAPIView):
    permission_classes = [IsAuthenticated]
    serializer_class = AccountWriteSerializer
    filterset_class = AccountFilter
    queryset = Account.objects.select_related("group", "sub_group", "parent").order_by("code")

    @extend_schema(tags=["accounting"], responses=AccountSerializer(many=True))
    def get(self, request, *args, **kwargs):
        if not request.user.has_perm(ACCOUNT_VIEW_PERMISSION):
            return forbidden("You do not have permission to view accounts.")

        qs = self.filter_queryset(self.get_queryset())
        page = self.paginate_queryset(qs)
        if page is not None:
            return self.get_paginated_response(AccountSerializer(page, many=True).data)
        return Response(AccountSerializer(qs, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(
        tags=["accounting"],
        request=AccountWriteSerializer,
        responses={201: AccountSerializer, 400: dict, 403: dict},
    )
    def post(self, request, *args, **kwargs):
        if not request.user.has_perm(ACCOUNT_ADD_PERMISSION):
            return forbidden("You do not have permission to create accounts.")

        s = self.get_serializer(data=request.data)
        s.is_valid(raise_exception=True)

        try:
            account = account_registry.create_account(**s.to_registry_kwargs())
        except SERVICE_ERRORS as exc:
            return service_error_response(exc)

        return Response(AccountSerializer(account).data, status=status.HTTP_201_CREATED)


class AccountDetailView(GenericAPIView):
    permission_classes = [IsAuthenticated]
    serializer_class = AccountWriteSerializer

    @extend_schema(tags=["accounting"], responses={200: AccountSerializer, 404: dict})
    def get(self, request, pk, *args, **kwargs):
        if not request.user.has_perm(ACCOUNT_VIEW_PERMISSION):
            return forbidden("You do not have permission to view accounts.")

        try:
            account = account_registry.get_account(pk)
        except SERVICE_ERRORS as exc:
            return service_error_response(exc)

        return Response(AccountSerializer(account).data, status=status.HTTP_200_OK)

    @extend_schema(
        tags=["accounting"],
        request=AccountWriteSerializer,
        responses={200: AccountSerializer, 400: dict, 403: dict, 404: dict},
    )
    def patch(self, request, pk, *args, **kwargs):
        if not request.user.has_perm(ACCOUNT_CHANGE_PERMISSION):
            return forbidden("You do not have permission to edit accounts.")

        s = self.get_serializer(data=request.data, partial=True)
        s.is_valid(raise_exception=True)

        try:
            account = account_registry.update_account(pk, **s.to_registry_kwargs())
        except SERVICE_ERRORS as exc:
            return service_error_response(exc)

        return Response(AccountSerializer(account).data, status=status.HTTP_200_OK)


class AccountSetActiveView(GenericAPIView):
    permission_classes = [IsAuthenticated]
    serializer_class = SetActiveSerializer

    @extend_schema(
        tags=["accounting"],
        request=SetActiveSerializer,
        responses={200: AccountSerializer, 403: dict, 404: dict},
    )
    def post(self, request, pk, *args, **kwargs):
        if not request.user.has_perm(ACCOUNT_CHANGE_PERMISSION):
            return forbidden("You do not have permission to edit accounts.")

        s = self.get_serializer(data=request.data)
        s.is_valid(raise_exception=True)

        try:
            account = account_registry.set_active(pk, s.validated_data["is_active"])
        except SERVICE_ERRORS as exc:
            return service_error_response(exc)

        return Response(AccountSerializer(account).data, status=status.HTTP_200_OK)


class AccountChildrenView(GenericAPIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(tags=["accounting"], responses=AccountSerializer(many=True))
    def get(self, request, pk, *args, **kwargs):
        if not request.user.has_perm(ACCOUNT_VIEW_PERMISSION):
            return forbidden("You do not have permission to view accounts.")

        try:
            parent = account_registry.get_account(pk)
        except SERVICE_ERRORS as exc:
            return service_error_response(exc)

        children = account_registry.list_children(parent.id)
        return Response(AccountSerializer(children, many=True).data, status=status.HTTP_200_OK)


class DefaultNormalBalanceView(GenericAPIView):
    """Lets the account form pre-fill the normal balance for a chosen type."""

    permission_classes = [IsAuthenticated]

    @extend_schema(
        tags=["accounting"],
        parameters=[
            OpenApiParameter(
                name="account_type",
                type=str,
                location=OpenApiParameter.QUERY,
                required=True,
                enum=AccountType.values,
            )
        ],
        responses={200: dict, 400: dict},
    )
    def get(self, request, *args, **kwargs):
        account_type = (request.query_params.get("account_type") or "").strip().upper()
        if account_type not in AccountType.values:
            return Response(
                {"detail": f"account_type must be one of {', '.join(AccountType.values)}"},
                status=status.HTTP_400_BAD_REQUEST,
            )

        return Response(
            {
                "account_type": account_type,
                "normal_balance": account_registry.default_normal_balance(account_type),
            },
            status=status.HTTP_200_OK,
        )
