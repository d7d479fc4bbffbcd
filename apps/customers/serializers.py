from decimal import Decimal
from rest_framework import serializers
from .models import Customer, Order


class CustomerSerializer(serializers.ModelSerializer):
    totalSpend = serializers.DecimalField(
        source='total_spend', max_digits=12, decimal_places=2,
        min_value=Decimal('0'), required=False, coerce_to_string=False
    )
    visits = serializers.IntegerField(min_value=0, required=False)
    lastActive = serializers.DateTimeField(source='last_active', required=False, allow_null=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Customer
        fields = (
            'id', 'name', 'email', 'phone', 'totalSpend', 'visits',
            'lastActive', 'createdAt', 'updatedAt'
        )


class OrderSerializer(serializers.ModelSerializer):
    customer = CustomerSerializer(read_only=True)
    customerId = serializers.PrimaryKeyRelatedField(
        source='customer', queryset=Customer.objects.all(), write_only=True
    )
    amount = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=Decimal('0.01'), coerce_to_string=False
    )
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Order
        fields = ('id', 'customer', 'customerId', 'amount', 'status', 'createdAt', 'updatedAt')
