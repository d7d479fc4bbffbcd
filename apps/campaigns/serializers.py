from rest_framework import serializers
from apps.customers.models import Customer
from apps.customers.serializers import CustomerSerializer
from .models import Campaign, CampaignLog
from .segments import LOGIC_AND, LOGIC_OR, normalize_filters


class SegmentValidationMixin:
    """Shared validation for anything carrying filters + logic."""

    def validate_filters(self, value):
        if isinstance(value, dict):
            value = normalize_filters(value)
        if not isinstance(value, list):
            raise serializers.ValidationError('Filters must be a list of rules.')

        rules = []
        for index, rule in enumerate(value):
            if not isinstance(rule, dict):
                raise serializers.ValidationError(f'Rule {index} must be an object.')
            key = rule.get('key')
            if not isinstance(key, str) or not key.strip():
                raise serializers.ValidationError(f'Rule {index} is missing a "key".')
            rules.append({'key': key.strip(), 'value': rule.get('value')})
        return rules

    def validate_logic(self, value):
        logic = str(value).strip().upper()
        if logic not in (LOGIC_AND, LOGIC_OR):
            raise serializers.ValidationError('Logic must be AND or OR.')
        return logic


class CampaignSerializer(SegmentValidationMixin, serializers.ModelSerializer):
    createdBy = serializers.PrimaryKeyRelatedField(source='created_by', read_only=True)
    filters = serializers.JSONField()
    logic = serializers.CharField(default=LOGIC_AND)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Campaign
        fields = (
            'id', 'name', 'createdBy', 'filters', 'logic', 'message',
            'objective', 'status', 'createdAt', 'updatedAt'
        )
        read_only_fields = ('status',)


class AudiencePreviewSerializer(SegmentValidationMixin, serializers.Serializer):
    filters = serializers.JSONField()
    logic = serializers.CharField(default=LOGIC_AND)


class CampaignSummarySerializer(serializers.ModelSerializer):
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = Campaign
        fields = ('id', 'name', 'message', 'status', 'createdAt')


class CampaignLogSerializer(serializers.ModelSerializer):
    campaign = serializers.PrimaryKeyRelatedField(queryset=Campaign.objects.all())
    customer = serializers.PrimaryKeyRelatedField(queryset=Customer.objects.all())
    status = serializers.ChoiceField(choices=CampaignLog.STATUS_CHOICES, default='SENT')
    vendorResponse = serializers.CharField(
        source='vendor_response', required=False, allow_blank=True,
        default='Simulated vendor API response'
    )
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = CampaignLog
        fields = ('id', 'campaign', 'customer', 'status', 'vendorResponse', 'createdAt', 'updatedAt')
        # The upsert in the view replaces the unique-together check
        validators = []

    def to_representation(self, instance):
        data = super().to_representation(instance)
        data['campaign'] = CampaignSummarySerializer(instance.campaign).data
        data['customer'] = CustomerSerializer(instance.customer).data
        return data


class DeliveryReceiptSerializer(serializers.Serializer):
    campaignId = serializers.IntegerField()
    customerId = serializers.IntegerField()
    status = serializers.ChoiceField(choices=CampaignLog.STATUS_CHOICES)
    vendorResponse = serializers.CharField(required=False, allow_blank=True, default='')


class VendorSendSerializer(serializers.Serializer):
    campaignId = serializers.IntegerField()
    customerId = serializers.IntegerField()
    message = serializers.CharField()
