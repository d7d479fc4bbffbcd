from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from apps.campaigns.models import Campaign
from apps.campaigns.stats import campaign_stats, with_log_counts
from apps.customers.models import Customer
from .repositories import DashboardRepository

RECENT_CAMPAIGNS_MAX = 50


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def dashboard(request):
    """Headline numbers for the dashboard landing page"""
    try:
        limit = int(request.GET.get('recent', 5))
    except ValueError:
        limit = 5
    limit = max(1, min(limit, RECENT_CAMPAIGNS_MAX))

    return Response(DashboardRepository.summary(limit))


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def campaign_performance(request):
    """Sent/failed/audience for every campaign"""
    campaigns = with_log_counts(Campaign.objects.order_by('-created_at'))
    # Only used by campaigns that have no logs yet
    customers = list(Customer.objects.all())
    data = [campaign_stats(campaign, customers) for campaign in campaigns]

    return Response({
        'campaigns': data,
        'total_campaigns': len(data)
    })
