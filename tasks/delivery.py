from celery import shared_task
import logging

from apps.campaigns.delivery import DeliveryOrchestrator
from apps.campaigns.exceptions import DeliveryReportingError

logger = logging.getLogger(__name__)


@shared_task
def deliver_campaign_message(campaign_id, customer_id):
    """Single send attempt for one audience member"""
    orchestrator = DeliveryOrchestrator()

    try:
        return orchestrator.attempt(campaign_id, customer_id)
    except DeliveryReportingError as e:
        # Isolated: sibling attempts keep going, the log row is simply missing
        logger.error(f"Delivery receipt lost: {e}")
        return {
            'campaign_id': campaign_id,
            'customer_id': customer_id,
            'status': e.status,
            'reported': False,
        }
