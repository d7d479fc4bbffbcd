import logging
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from apps.campaigns.models import Campaign
from apps.campaigns.stats import performance_summary_stats
from .client import AIServiceError, TextGenerationClient
from .prompts import build_suggestion_prompt, build_summary_prompt, split_suggestions
from .serializers import SuggestMessageSerializer, SummarizePerformanceSerializer

logger = logging.getLogger(__name__)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def suggest_message(request):
    """Draft three campaign messages for an objective"""
    serializer = SuggestMessageSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        suggestions = TextGenerationClient().generate_text(
            build_suggestion_prompt(serializer.validated_data['objective'])
        )
    except AIServiceError as e:
        logger.error(f"AI suggestion failed: {e}")
        return Response({'error': 'AI suggestion failed'}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    return Response({
        'suggestions': suggestions,
        'messages': split_suggestions(suggestions)
    })


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def summarize_performance(request):
    """Plain-language summary of campaign stats"""
    serializer = SummarizePerformanceSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    campaign_name = data.get('campaignName')
    stats = data.get('stats')
    if stats is None:
        campaign = Campaign.objects.filter(pk=data['campaignId']).first()
        if campaign is None:
            return Response({'error': 'Campaign not found'}, status=status.HTTP_404_NOT_FOUND)
        stats = performance_summary_stats(campaign)
        campaign_name = campaign_name or campaign.name

    try:
        summary = TextGenerationClient().generate_text(build_summary_prompt(stats, campaign_name))
    except AIServiceError as e:
        logger.error(f"AI summarization failed: {e}")
        return Response({'error': 'AI summarization failed'}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    return Response({'summary': summary, 'stats': stats})
