from decimal import Decimal
from unittest import mock

from django.contrib.auth import get_user_model
from django.test import override_settings
from rest_framework import status
from rest_framework.test import APITestCase

from apps.campaigns.delivery import VendorOutcome
from apps.campaigns.models import Campaign, CampaignLog
from apps.customers.models import Customer

User = get_user_model()


class CampaignAPITestCase(APITestCase):
    def setUp(self):
        self.user = User.objects.create_user(
            username='marketer', email='marketer@example.com', password='testpass123'
        )
        self.client.force_authenticate(user=self.user)

        self.loyal = Customer.objects.create(
            name='Loyal', email='loyal@example.com', total_spend=Decimal('2500.00'), visits=8
        )
        self.casual = Customer.objects.create(
            name='Casual', email='casual@example.com', total_spend=Decimal('1000.00'), visits=1
        )
        self.new = Customer.objects.create(name='New', email='new@example.com')

    def create_campaign(self, **overrides):
        payload = {
            'name': 'Spring sale',
            'filters': [{'key': 'minSpend', 'value': 1000}],
            'logic': 'AND',
            'message': 'Spring deals inside',
        }
        payload.update(overrides)
        with self.captureOnCommitCallbacks(execute=True):
            return self.client.post('/api/v1/campaigns/', payload, format='json')


class CampaignCreateTest(CampaignAPITestCase):
    def test_create_launches_delivery_for_matched_customers(self):
        response = self.create_campaign()

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['matchedCustomers'], 2)
        self.assertEqual(response.data['campaign']['createdBy'], self.user.pk)

        campaign = Campaign.objects.get(pk=response.data['campaign']['id'])
        self.assertEqual(campaign.logs.count(), 2)
        self.assertEqual(campaign.status, 'SENT')
        self.assertEqual(
            set(campaign.logs.values_list('customer_id', flat=True)),
            {self.loyal.pk, self.casual.pk}
        )

    def test_or_logic(self):
        response = self.create_campaign(
            filters=[{'key': 'minSpend', 'value': 2000}, {'key': 'minVisits', 'value': 1}],
            logic='or'
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['matchedCustomers'], 2)
        self.assertEqual(response.data['campaign']['logic'], 'OR')

    def test_empty_filters_target_everyone(self):
        response = self.create_campaign(filters=[])

        self.assertEqual(response.data['matchedCustomers'], 3)
        self.assertEqual(CampaignLog.objects.count(), 3)

    def test_legacy_mapping_filters(self):
        response = self.create_campaign(filters={'minSpend': 2000})

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['matchedCustomers'], 1)
        self.assertEqual(
            response.data['campaign']['filters'],
            [{'key': 'minSpend', 'value': 2000}]
        )

    def test_validation_errors(self):
        response = self.client.post('/api/v1/campaigns/', {'filters': []}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('name', response.data)
        self.assertIn('message', response.data)

        response = self.create_campaign(filters=[{'value': 10}])
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        response = self.create_campaign(logic='XOR')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(Campaign.objects.exists())

    def test_broker_failure_does_not_fail_creation(self):
        with mock.patch(
            'apps.campaigns.views.launch_campaign', side_effect=ConnectionError('broker down')
        ):
            response = self.create_campaign()

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(Campaign.objects.filter(pk=response.data['campaign']['id']).exists())

    def test_requires_authentication(self):
        self.client.force_authenticate(user=None)
        response = self.client.get('/api/v1/campaigns/')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)


class CampaignReadDeleteTest(CampaignAPITestCase):
    def test_list_and_retrieve(self):
        campaign_id = self.create_campaign().data['campaign']['id']

        response = self.client.get('/api/v1/campaigns/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)

        response = self.client.get(f'/api/v1/campaigns/{campaign_id}/')
        self.assertEqual(response.data['name'], 'Spring sale')

    def test_stats(self):
        campaign_id = self.create_campaign().data['campaign']['id']

        response = self.client.get(f'/api/v1/campaigns/{campaign_id}/stats/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['audienceSize'], 2)
        self.assertEqual(response.data['sent'] + response.data['failed'], 2)

    def test_preview_audience_creates_nothing(self):
        response = self.client.post(
            '/api/v1/campaigns/preview-audience/',
            {'filters': [{'key': 'minVisits', 'value': 5}]},
            format='json'
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['audienceSize'], 1)
        self.assertFalse(Campaign.objects.exists())

    def test_delete_cascades_to_logs(self):
        campaign_id = self.create_campaign().data['campaign']['id']
        self.assertEqual(CampaignLog.objects.filter(campaign_id=campaign_id).count(), 2)

        response = self.client.delete(f'/api/v1/campaigns/{campaign_id}/')

        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Campaign.objects.filter(pk=campaign_id).exists())
        self.assertFalse(CampaignLog.objects.filter(campaign_id=campaign_id).exists())

    def test_delete_missing_campaign(self):
        response = self.client.delete('/api/v1/campaigns/424242/')

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data['error'], 'Campaign not found')


class CampaignLogAPITest(CampaignAPITestCase):
    def setUp(self):
        super().setUp()
        self.campaign = Campaign.objects.create(
            name='Receipts', created_by=self.user, filters=[], message='Hello'
        )

    def receipt(self, **overrides):
        payload = {
            'campaignId': self.campaign.pk,
            'customerId': self.loyal.pk,
            'status': 'SENT',
            'vendorResponse': 'delivered',
        }
        payload.update(overrides)
        return self.client.post('/api/v1/logs/update-status/', payload, format='json')

    def test_receipt_creates_then_updates(self):
        first = self.receipt()
        second = self.receipt(status='FAILED', vendorResponse='bounced')

        self.assertEqual(first.status_code, status.HTTP_201_CREATED)
        self.assertEqual(second.status_code, status.HTTP_200_OK)
        self.assertEqual(first.data['id'], second.data['id'])

        log = CampaignLog.objects.get(campaign=self.campaign, customer=self.loyal)
        self.assertEqual(log.status, 'FAILED')
        self.assertEqual(log.vendor_response, 'bounced')

    def test_receipt_requires_fields(self):
        response = self.client.post(
            '/api/v1/logs/update-status/', {'campaignId': self.campaign.pk}, format='json'
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('customerId', response.data)
        self.assertIn('status', response.data)

    def test_receipt_for_unknown_campaign(self):
        response = self.receipt(campaignId=424242)
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_receipt_with_invalid_status(self):
        response = self.receipt(status='OPENED')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_create_log_upserts(self):
        payload = {'campaign': self.campaign.pk, 'customer': self.casual.pk, 'status': 'SENT'}

        first = self.client.post('/api/v1/logs/', payload, format='json')
        second = self.client.post('/api/v1/logs/', payload, format='json')

        self.assertEqual(first.status_code, status.HTTP_201_CREATED)
        self.assertEqual(second.status_code, status.HTTP_200_OK)
        self.assertEqual(CampaignLog.objects.count(), 1)
        self.assertEqual(first.data['customer']['email'], 'casual@example.com')
        self.assertEqual(first.data['campaign']['name'], 'Receipts')

    def test_list_filters_by_campaign(self):
        other = Campaign.objects.create(name='Other', created_by=self.user, filters=[], message='Hi')
        self.receipt()
        self.receipt(campaignId=other.pk, status='FAILED')

        response = self.client.get('/api/v1/logs/', {'campaign': self.campaign.pk})
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]['campaign']['id'], self.campaign.pk)

        response = self.client.get('/api/v1/logs/', {'status': 'failed'})
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]['status'], 'FAILED')


class VendorSendMessageTest(CampaignAPITestCase):
    def setUp(self):
        super().setUp()
        self.campaign = Campaign.objects.create(
            name='Vendor', created_by=self.user, filters=[], message='Hello'
        )
        self.payload = {
            'campaignId': self.campaign.pk,
            'customerId': self.loyal.pk,
            'message': 'Hello Loyal',
        }

    @override_settings(VENDOR_SUCCESS_RATE=1.0)
    def test_send_message_records_outcome(self):
        response = self.client.post('/api/v1/vendor/send-message/', self.payload, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, {'status': 'processed', 'outcome': 'SENT'})
        log = CampaignLog.objects.get(campaign=self.campaign, customer=self.loyal)
        self.assertEqual(log.vendor_response, 'Simulated delivery success.')

    def test_repeated_send_keeps_one_log(self):
        self.client.post('/api/v1/vendor/send-message/', self.payload, format='json')
        self.client.post('/api/v1/vendor/send-message/', self.payload, format='json')

        self.assertEqual(
            CampaignLog.objects.filter(campaign=self.campaign, customer=self.loyal).count(), 1
        )

    def test_reporting_failure_returns_500(self):
        with mock.patch(
            'apps.campaigns.delivery.simulate_vendor_decision',
            return_value=VendorOutcome('FAILED', 'Simulated delivery failure.')
        ), mock.patch(
            'apps.campaigns.delivery.report_delivery_outcome',
            side_effect=RuntimeError('log store unavailable')
        ):
            response = self.client.post('/api/v1/vendor/send-message/', self.payload, format='json')

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertFalse(CampaignLog.objects.exists())

    def test_unknown_campaign_or_customer_is_404(self):
        response = self.client.post(
            '/api/v1/vendor/send-message/', {**self.payload, 'campaignId': 424242}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertIn('Campaign 424242', response.data['error'])

        response = self.client.post(
            '/api/v1/vendor/send-message/', {**self.payload, 'customerId': 424242}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertFalse(CampaignLog.objects.exists())

    def test_message_is_required(self):
        del self.payload['message']
        response = self.client.post('/api/v1/vendor/send-message/', self.payload, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
