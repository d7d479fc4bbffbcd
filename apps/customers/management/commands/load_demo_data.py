import random
from datetime import timedelta
from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from apps.customers.models import Customer, Order

FIRST_NAMES = ['Asha', 'Ravi', 'Meera', 'Kabir', 'Neha', 'Arjun', 'Isha', 'Vikram', 'Tara', 'Dev']
LAST_NAMES = ['Sharma', 'Iyer', 'Patel', 'Khan', 'Reddy', 'Das', 'Menon', 'Gupta']


class Command(BaseCommand):
    help = 'Load demo customers and orders for trying out segments and campaigns'

    def add_arguments(self, parser):
        parser.add_argument('--customers', type=int, default=50)
        parser.add_argument('--max-orders', type=int, default=8)
        parser.add_argument('--seed', type=int, default=None)

    def handle(self, *args, **options):
        seed = options['seed']
        if seed is None:
            seed = random.randrange(2 ** 32)
        now = timezone.now()
        created_customers = 0
        created_orders = 0

        with transaction.atomic():
            for index in range(options['customers']):
                # One generator per index keeps reruns with the same seed on the same emails
                rng = random.Random(f"{seed}-{index}")
                first, last = rng.choice(FIRST_NAMES), rng.choice(LAST_NAMES)
                customer, created = Customer.objects.get_or_create(
                    email=f"{first}.{last}.{index}@example.com".lower(),
                    defaults={
                        'name': f"{first} {last}",
                        'phone': f"+91{rng.randint(7000000000, 9999999999)}",
                    }
                )
                if not created:
                    continue
                created_customers += 1

                orders = [
                    Order(
                        customer=customer,
                        amount=Decimal(rng.randint(200, 8000)),
                        status=rng.choice(['PENDING', 'COMPLETED', 'COMPLETED', 'CANCELLED']),
                    )
                    for _ in range(rng.randint(0, options['max_orders']))
                ]
                Order.objects.bulk_create(orders)
                created_orders += len(orders)

                # Spread activity over the last 120 days so inactiveDays rules have something to match
                customer.total_spend = sum((order.amount for order in orders), Decimal('0'))
                customer.visits = len(orders)
                customer.last_active = now - timedelta(days=rng.randint(0, 120)) if orders else None
                customer.save(update_fields=['total_spend', 'visits', 'last_active'])

        self.stdout.write(
            self.style.SUCCESS(
                f'Created {created_customers} customers and {created_orders} orders'
            )
        )
