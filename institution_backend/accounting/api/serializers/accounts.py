# accounting/api/serializers/accounts.py

from rest_framework import serializers

from accounting.models.account import Account
from accounting.models.choices import AccountType, NormalBalance
from accounting.models.group import AccountGroup, AccountSubGroup


class AccountSerializer(serializers.ModelSerializer):
    """
    Read serializer for the chart of accounts screens.
    Group / sub-group / parent are exposed by id plus a display label.
    """

    group_name = serializers.CharField(source="group.name", read_only=True, default=None)
    sub_group_name = serializers.CharField(
        source="sub_group.name", read_only=True, default=None
    )
    parent_code = serializers.CharField(source="parent.code", read_only=True, default=None)

    class Meta:
        model = Account
        fields = (
            "id",
            "code",
            "name",
            "account_type",
            "normal_balance",
            "group",
            "group_name",
            "sub_group",
            "sub_group_name",
            "parent",
            "parent_code",
            "description",
            "is_active",
            "created_at",
            "updated_at",
        )
        read_only_fields = fields


class AccountWriteSerializer(serializers.Serializer):
    """
    Input for create / partial update. Relationship and type rules are
    enforced by the registry (Account.clean), not here.
    """

    code = serializers.CharField(max_length=20)
    name = serializers.CharField(max_length=150)
    account_type = serializers.ChoiceField(choices=AccountType.choices)
    normal_balance = serializers.ChoiceField(
        choices=NormalBalance.choices, required=False, allow_blank=True
    )
    group = serializers.IntegerField(required=False, allow_null=True)
    sub_group = serializers.IntegerField(required=False, allow_null=True)
    parent = serializers.IntegerField(required=False, allow_null=True)
    description = serializers.CharField(required=False, allow_blank=True, default="")

    def to_registry_kwargs(self) -> dict:
        data = dict(self.validated_data)
        for field in ("group", "sub_group", "parent"):
            if field in data:
                data[f"{field}_id"] = data.pop(field)
        if "normal_balance" in data and not data["normal_balance"]:
            data.pop("normal_balance")
        return data


class SetActiveSerializer(serializers.Serializer):
    is_active = serializers.BooleanField()


class AccountGroupSerializer(serializers.ModelSerializer):
    class Meta:
        model = AccountGroup
        fields = ("id", "name", "description", "account_type", "created_at")
        read_only_fields = ("id", "created_at")
        # Uniqueness is reported by the model's full_clean as a 400.
        validators = []


class AccountSubGroupSerializer(serializers.ModelSerializer):
    account_type = serializers.CharField(read_only=True)
    group_name = serializers.CharField(source="group.name", read_only=True)

    class Meta:
        model = AccountSubGroup
        fields = (
            "id",
            "name",
            "description",
            "group",
            "group_name",
            "account_type",
            "created_at",
        )
        read_only_fields = ("id", "group_name", "account_type", "created_at")
        validators = []
