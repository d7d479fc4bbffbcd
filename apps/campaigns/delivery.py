"""Simulated campaign delivery.

Launching a campaign fans out one Celery task per audience member. Each
task asks the simulated vendor for an outcome (a single Bernoulli draw,
never redrawn) and records it with an upsert keyed on (campaign, customer),
so a receipt reported twice still leaves exactly one log row.
"""
import logging
import random
from collections import namedtuple

from celery import group
from django.conf import settings
from django.db import DatabaseError, transaction
from django.utils import timezone
from rest_framework.exceptions import ValidationError
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from apps.customers.models import Customer
from .exceptions import DeliveryReportingError, NotFoundError
from .models import Campaign, CampaignLog
from .segments import evaluate_segment

logger = logging.getLogger(__name__)

SENT = 'SENT'
FAILED = 'FAILED'
DELIVERY_STATUSES = (SENT, FAILED)

VENDOR_RESPONSES = {
    SENT: 'Simulated delivery success.',
    FAILED: 'Simulated delivery failure.',
}

VendorOutcome = namedtuple('VendorOutcome', ['status', 'vendor_response'])


def simulate_vendor_decision(success_rate=None, rng=None):
    """SENT with probability success_rate, FAILED otherwise."""
    if success_rate is None:
        success_rate = settings.VENDOR_SUCCESS_RATE
    rng = rng or random
    status = SENT if rng.random() < success_rate else FAILED
    return VendorOutcome(status, VENDOR_RESPONSES[status])


def report_delivery_outcome(campaign_id, customer_id, status, vendor_response=''):
    """Insert or update the log for (campaign, customer). Last write wins.

    Returns a (log, created) tuple.
    """
    if status not in DELIVERY_STATUSES:
        raise ValidationError({'status': f"Must be one of {', '.join(DELIVERY_STATUSES)}"})

    if not Campaign.objects.filter(pk=campaign_id).exists():
        raise NotFoundError(f"Campaign {campaign_id} not found")
    if not Customer.objects.filter(pk=customer_id).exists():
        raise NotFoundError(f"Customer {customer_id} not found")

    with transaction.atomic():
        log, created = CampaignLog.objects.update_or_create(
            campaign_id=campaign_id,
            customer_id=customer_id,
            defaults={
                'status': status,
                'vendor_response': vendor_response or '',
                'updated_at': timezone.now(),
            }
        )

    logger.info(
        f"Delivery receipt {'created' if created else 'updated'}: "
        f"campaign {campaign_id}, customer {customer_id} -> {status}"
    )
    return log, created


@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=0.5, max=4),
    retry=retry_if_exception_type(DatabaseError),
    reraise=True
)
def _report_with_retry(campaign_id, customer_id, status, vendor_response):
    # Safe to repeat: the upsert is keyed on (campaign, customer)
    return report_delivery_outcome(campaign_id, customer_id, status, vendor_response)


class DeliveryOrchestrator:
    """Runs send attempts: one vendor decision, then one reported outcome.

    Both steps are injectable so callers can swap the random vendor for a
    deterministic one or point reporting elsewhere.
    """

    def __init__(self, decide=None, report=None):
        self.decide = decide or simulate_vendor_decision
        self.report = report or _report_with_retry

    def attempt(self, campaign_id, customer_id):
        outcome = self.decide()

        try:
            log, created = self.report(
                campaign_id, customer_id, outcome.status, outcome.vendor_response
            )
        except Exception as e:
            raise DeliveryReportingError(campaign_id, customer_id, outcome.status, e) from e

        return {
            'campaign_id': campaign_id,
            'customer_id': customer_id,
            'status': outcome.status,
            'log_id': log.pk,
            'created': created,
            'reported': True,
        }

    def launch(self, campaign, audience=None):
        """Fan out one delivery task per audience member without waiting.

        `audience` may hold customers or customer ids; when omitted it is
        computed from the campaign's filters. Returns the Celery GroupResult,
        or None when there is nobody to send to. Workers run each attempt
        with a default orchestrator.
        """
        from tasks.delivery import deliver_campaign_message

        if audience is None:
            audience = evaluate_segment(Customer.objects.all(), campaign.filters, campaign.logic)

        customer_ids = [getattr(customer, 'pk', customer) for customer in audience]
        if not customer_ids:
            logger.info(f"Campaign {campaign.pk} has an empty audience, nothing to send")
            return None

        job = group(
            deliver_campaign_message.s(campaign.pk, customer_id)
            for customer_id in customer_ids
        )
        result = job.apply_async()

        Campaign.objects.filter(pk=campaign.pk).update(status='SENT', updated_at=timezone.now())
        logger.info(f"Campaign {campaign.pk} launched: {len(customer_ids)} send attempts issued")
        return result


def launch_campaign(campaign, audience=None):
    return DeliveryOrchestrator().launch(campaign, audience)


def delete_campaign(campaign_id):
    """Hard-delete a campaign and every log row that references it.

    Returns the number of logs removed.
    """
    with transaction.atomic():
        campaign = Campaign.objects.filter(pk=campaign_id).first()
        if campaign is None:
            raise NotFoundError(f"Campaign {campaign_id} not found")

        deleted_logs, _ = CampaignLog.objects.filter(campaign_id=campaign_id).delete()
        campaign.delete()

    logger.info(f"Campaign {campaign_id} deleted with {deleted_logs} logs")
    return deleted_logs
