from rest_framework import serializers


class SuggestMessageSerializer(serializers.Serializer):
    objective = serializers.CharField(max_length=500)


class SummarizePerformanceSerializer(serializers.Serializer):
    stats = serializers.DictField(required=False)
    campaignId = serializers.IntegerField(required=False)
    campaignName = serializers.CharField(required=False, allow_blank=True)

    def validate(self, data):
        if 'stats' not in data and 'campaignId' not in data:
            raise serializers.ValidationError('Provide either stats or campaignId.')
        return data
