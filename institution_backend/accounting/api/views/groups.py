# accounting/api/views/groups.py

"""
ACCOUNT GROUP / SUB-GROUP API

GET  /api/accounting/groups/?account_type=ASSET
POST /api/accounting/groups/
GET  /api/accounting/sub-groups/?account_type=ASSET&group=3
POST /api/accounting/sub-groups/
"""

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.generics import GenericAPIView
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from accounting.api.filters import AccountGroupFilter, AccountSubGroupFilter
from accounting.api.serializers.accounts import (
    AccountGroupSerializer,
    AccountSubGroupSerializer,
)
from accounting.api.views._common import SERVICE_ERRORS, forbidden, service_error_response
from accounting.models.group import AccountGroup, AccountSubGroup
from accounting.services import account_registry

GROUP_VIEW_PERMISSION = "accounting.view_accountgroup"
GROUP_ADD_PERMISSION = "accounting.add_accountgroup"


class AccountGroupListCreateView(GenericAPIView):
    permission_classes = [IsAuthenticated]
    serializer_class = AccountGroupSerializer
    filterset_class = AccountGroupFilter
    pagination_class = None
    queryset = AccountGroup.objects.order_by("account_type", "name")

    @extend_schema(tags=["accounting"], responses=AccountGroupSerializer(many=True))
    def get(self, request, *args, **kwargs):
        if not request.user.has_perm(GROUP_VIEW_PERMISSION):
            return forbidden("You do not have permission to view account groups.")

        qs = self.filter_queryset(self.get_queryset())
        return Response(self.get_serializer(qs, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(
        tags=["accounting"],
        request=AccountGroupSerializer,
        responses={201: AccountGroupSerializer, 400: dict, 403: dict},
    )
    def post(self, request, *args, **kwargs):
        if not request.user.has_perm(GROUP_ADD_PERMISSION):
            return forbidden("You do not have permission to create account groups.")

        s = self.get_serializer(data=request.data)
        s.is_valid(raise_exception=True)
        data = s.validated_data

        try:
            group = account_registry.create_group(
                name=data["name"],
                account_type=data["account_type"],
                description=data.get("description", ""),
            )
        except SERVICE_ERRORS as exc:
            return service_error_response(exc)

        return Response(self.get_serializer(group).data, status=status.HTTP_201_CREATED)


class AccountSubGroupListCreateView(GenericAPIView):
    permission_classes = [IsAuthenticated]
    serializer_class = AccountSubGroupSerializer
    filterset_class = AccountSubGroupFilter
    pagination_class = None
    queryset = AccountSubGroup.objects.select_related("group").order_by("group__name", "name")

    @extend_schema(tags=["accounting"], responses=AccountSubGroupSerializer(many=True))
    def get(self, request, *args, **kwargs):
        if not request.user.has_perm(GROUP_VIEW_PERMISSION):
            return forbidden("You do not have permission to view account groups.")

        qs = self.filter_queryset(self.get_queryset())
        return Response(self.get_serializer(qs, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(
        tags=["accounting"],
        request=AccountSubGroupSerializer,
        responses={201: AccountSubGroupSerializer, 400: dict, 403: dict},
    )
    def post(self, request, *args, **kwargs):
        if not request.user.has_perm(GROUP_ADD_PERMISSION):
            return forbidden("You do not have permission to create account groups.")

        s = self.get_serializer(data=request.data)
        s.is_valid(raise_exception=True)
        data = s.validated_data

        try:
            sub_group = account_registry.create_sub_group(
                name=data["name"],
                group_id=data["group"].id,
                description=data.get("description", ""),
            )
        except SERVICE_ERRORS as exc:
            return service_error_response(exc)

        return Response(self.get_serializer(sub_group).data, status=status.HTTP_201_CREATED)
