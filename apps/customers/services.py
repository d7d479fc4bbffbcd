import logging
from django.db import transaction
from django.db.models import F
from django.utils import timezone
from .models import Customer, Order

logger = logging.getLogger(__name__)


def place_order(customer_id, amount, status='PENDING'):
    """Create an order and roll it into the customer's spend and visits.

    Raises Customer.DoesNotExist when the customer is unknown.
    """
    with transaction.atomic():
        customer = Customer.objects.select_for_update().get(pk=customer_id)
        order = Order.objects.create(customer=customer, amount=amount, status=status)

        Customer.objects.filter(pk=customer.pk).update(
            total_spend=F('total_spend') + amount,
            visits=F('visits') + 1,
            last_active=timezone.now()
        )

    logger.info(f"Order {order.pk} placed for customer {customer_id}: {amount}")
    return order
