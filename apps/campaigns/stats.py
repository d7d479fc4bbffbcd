"""Campaign performance numbers, derived from the log store on read."""
from django.db.models import Count, Q

from apps.customers.models import Customer
from .models import CampaignLog
from .segments import coerce_number, evaluate_segment

HIGH_VALUE_SPEND = 10000
VENDOR_RESPONSE_SAMPLES = 3


def with_log_counts(campaigns):
    """Annotate a Campaign queryset so campaign_stats skips its per-campaign aggregate."""
    return campaigns.annotate(
        log_total=Count('logs'),
        log_sent=Count('logs', filter=Q(logs__status='SENT')),
        log_failed=Count('logs', filter=Q(logs__status='FAILED')),
    )


def _log_counts(campaign):
    if hasattr(campaign, 'log_total'):
        return {
            'total': campaign.log_total,
            'sent': campaign.log_sent,
            'failed': campaign.log_failed,
        }
    return CampaignLog.objects.filter(campaign=campaign).aggregate(
        total=Count('id'),
        sent=Count('id', filter=Q(status='SENT')),
        failed=Count('id', filter=Q(status='FAILED')),
    )


def campaign_stats(campaign, customers=None):
    """Sent/failed counts and audience size for a campaign.

    Once delivery has produced logs the audience size is the log count.
    Before that (right after creation) it falls back to recomputing the
    segment from the campaign's filters.
    """
    counts = _log_counts(campaign)
    total = counts['total']

    if total:
        audience_size = total
        audience_source = 'logs'
    else:
        if customers is None:
            customers = Customer.objects.all()
        audience_size = len(evaluate_segment(customers, campaign.filters, campaign.logic))
        audience_source = 'filters'

    return {
        'campaignId': campaign.pk,
        'name': campaign.name,
        'audienceSize': audience_size,
        'audienceSource': audience_source,
        'sent': counts['sent'],
        'failed': counts['failed'],
        'deliveryRate': round(counts['sent'] * 100.0 / total, 1) if total else 0.0,
    }


def performance_summary_stats(campaign):
    """campaign_stats plus the high-spend breakdown fed to the AI summary."""
    stats = campaign_stats(campaign)

    logs = list(
        CampaignLog.objects.filter(campaign=campaign)
        .select_related('customer')
        .order_by('created_at')
    )
    high_value = [
        log for log in logs
        if coerce_number(log.customer.total_spend) > HIGH_VALUE_SPEND
    ]
    high_value_sent = sum(1 for log in high_value if log.status == 'SENT')

    stats['highValueGroupCount'] = len(high_value)
    stats['highValueDeliveryRate'] = (
        f"{round(high_value_sent * 100 / len(high_value))}%" if high_value else 'N/A'
    )
    stats['vendorResponsesExample'] = [
        log.vendor_response for log in logs if log.vendor_response
    ][:VENDOR_RESPONSE_SAMPLES]
    return stats
