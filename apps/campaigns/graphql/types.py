import strawberry
import strawberry_django
from django.utils.functional import SimpleLazyObject
from strawberry import auto
from apps.campaigns.models import Campaign, CampaignLog
from apps.campaigns.stats import campaign_stats
from apps.customers.models import Customer, Order


@strawberry_django.type(Customer)
class CustomerType:
    id: auto
    name: auto
    email: auto
    phone: auto
    total_spend: auto
    visits: auto
    last_active: auto
    created_at: auto


@strawberry_django.type(Order)
class OrderType:
    id: auto
    customer: CustomerType
    amount: auto
    status: auto
    created_at: auto


def _segment_customers(info):
    """Customer list shared by every campaign resolved in one request."""
    request = info.context.request
    customers = getattr(request, '_segment_customers', None)
    if customers is None:
        customers = SimpleLazyObject(lambda: list(Customer.objects.all()))
        request._segment_customers = customers
    return customers


@strawberry.type
class CampaignStatsType:
    audience_size: int
    audience_source: str
    sent: int
    failed: int
    delivery_rate: float


@strawberry_django.type(Campaign)
class CampaignType:
    id: auto
    name: auto
    message: auto
    objective: auto
    logic: auto
    status: auto
    created_at: auto

    @strawberry.field
    def stats(self, info: strawberry.Info) -> CampaignStatsType:
        data = campaign_stats(self, _segment_customers(info))
        return CampaignStatsType(
            audience_size=data['audienceSize'],
            audience_source=data['audienceSource'],
            sent=data['sent'],
            failed=data['failed'],
            delivery_rate=data['deliveryRate'],
        )


@strawberry_django.type(CampaignLog)
class CampaignLogType:
    id: auto
    campaign: CampaignType
    customer: CustomerType
    status: auto
    vendor_response: auto
    created_at: auto
    updated_at: auto
