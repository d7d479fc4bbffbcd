from io import StringIO

from django.core.management import call_command
from django.test import TestCase

from apps.customers.models import Customer, Order


class LoadDemoDataTest(TestCase):
    def test_counters_match_generated_orders(self):
        out = StringIO()
        call_command('load_demo_data', customers=10, max_orders=4, seed=7, stdout=out)

        self.assertEqual(Customer.objects.count(), 10)
        self.assertIn('Created 10 customers', out.getvalue())
        for customer in Customer.objects.all():
            orders = Order.objects.filter(customer=customer)
            self.assertEqual(customer.visits, orders.count())
            self.assertEqual(customer.total_spend, sum(order.amount for order in orders))
            if not orders:
                self.assertIsNone(customer.last_active)

    def test_rerun_with_same_seed_skips_existing(self):
        call_command('load_demo_data', customers=5, seed=1, stdout=StringIO())
        call_command('load_demo_data', customers=5, seed=1, stdout=StringIO())

        self.assertEqual(Customer.objects.count(), 5)

    def test_rerun_with_larger_count_only_adds_new_indexes(self):
        call_command('load_demo_data', customers=5, seed=3, stdout=StringIO())
        emails = set(Customer.objects.values_list('email', flat=True))

        out = StringIO()
        call_command('load_demo_data', customers=8, seed=3, stdout=out)

        self.assertEqual(Customer.objects.count(), 8)
        self.assertTrue(emails <= set(Customer.objects.values_list('email', flat=True)))
        self.assertIn('Created 3 customers', out.getvalue())
