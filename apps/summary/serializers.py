"""
Serializers for summary app.

Input Serializers:
    SummaryFilterSerializer - Validates date range and tag parameters

Response Serializers:
    FriendBalanceSerializer - Net amount with one counterpart
    UserSummarySerializer - The full summary payload
"""

from rest_framework import serializers


# =============================================================================
# Input Serializers (Query Parameter Validation)
# =============================================================================

class SummaryFilterSerializer(serializers.Serializer):
    """
    Validate summary query parameters.

    Query Parameters:
        date_from (date): Bills created from this date
        date_to (date): Bills created up to this date
        tag (str): Only bills with this tag
    """

    date_from = serializers.DateField(required=False)
    date_to = serializers.DateField(required=False)
    tag = serializers.CharField(required=False, max_length=50)

    def validate(self, attrs):
        date_from = attrs.get('date_from')
        date_to = attrs.get('date_to')

        if date_from and date_to and date_from > date_to:
            raise serializers.ValidationError({
                'date_to': 'End date must be after start date'
            })

        return attrs


# =============================================================================
# Response Serializers (Documentation & Output Formatting)
# =============================================================================

class FriendBalanceSerializer(serializers.Serializer):
    """Positive net_amount means the friend owes you."""
    user_id = serializers.CharField()
    user_name = serializers.CharField()
    avatar = serializers.CharField(allow_blank=True)
    net_amount = serializers.FloatField()


class UserSummarySerializer(serializers.Serializer):
    """Response serializer for the user summary."""
    total_to_pay = serializers.FloatField()
    total_to_collect = serializers.FloatField()
    net_balance = serializers.FloatField()
    bills_as_host = serializers.IntegerField()
    bills_as_member = serializers.IntegerField()
    friend_balances = FriendBalanceSerializer(many=True)


class ErrorSerializer(serializers.Serializer):
    """Standard error response serializer."""
    error = serializers.CharField()
