# apps/analytics/repositories/dashboard.py
from datetime import timedelta
from django.db.models import Count, Q, Sum
from django.utils import timezone
from apps.campaigns.models import Campaign, CampaignLog
from apps.customers.models import Customer, Order
from .cached import cache_heavy_query
from .performance import monitor_query_performance


class DashboardRepository:
    @staticmethod
    @monitor_query_performance
    def revenue():
        start_of_day = timezone.localtime().replace(hour=0, minute=0, second=0, microsecond=0)
        totals = Order.objects.aggregate(
            total=Sum('amount'),
            today=Sum('amount', filter=Q(created_at__gte=start_of_day)),
            count=Count('id'),
        )
        return {
            'totalRevenue': float(totals['total'] or 0),
            'todayRevenue': float(totals['today'] or 0),
            'totalOrders': totals['count'],
        }

    @staticmethod
    @monitor_query_performance
    def top_customer():
        customer = Customer.objects.order_by('-total_spend', 'pk').first()
        if customer is None:
            return None
        return {
            'id': customer.pk,
            'name': customer.name,
            'totalSpend': float(customer.total_spend),
        }

    @staticmethod
    @monitor_query_performance
    def recent_campaigns(limit=5):
        campaigns = (
            Campaign.objects
            .annotate(
                sent=Count('logs', filter=Q(logs__status='SENT')),
                failed=Count('logs', filter=Q(logs__status='FAILED')),
            )
            .order_by('-created_at')[:limit]
        )
        return [{
            'id': campaign.pk,
            'name': campaign.name,
            'sent': campaign.sent,
            'failed': campaign.failed,
            'createdAt': campaign.created_at.isoformat(),
        } for campaign in campaigns]

    @staticmethod
    @monitor_query_performance
    def delivery_totals(days=30):
        since = timezone.now() - timedelta(days=days)
        return CampaignLog.objects.filter(created_at__gte=since).aggregate(
            sent=Count('id', filter=Q(status='SENT')),
            failed=Count('id', filter=Q(status='FAILED')),
        )

    @staticmethod
    @cache_heavy_query()
    def summary(recent_limit=5):
        return {
            'totalCustomers': Customer.objects.count(),
            **DashboardRepository.revenue(),
            'topCustomer': DashboardRepository.top_customer(),
            'totalCampaigns': Campaign.objects.count(),
            'recentCampaigns': DashboardRepository.recent_campaigns(recent_limit),
            'deliveryLast30Days': DashboardRepository.delivery_totals(),
        }
