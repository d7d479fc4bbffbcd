import strawberry
from typing import List, Optional
from apps.campaigns.models import Campaign, CampaignLog
from apps.campaigns.stats import with_log_counts
from apps.customers.models import Customer, Order
from core.graphql.permissions import IsAuthenticated
from .types import CampaignType, CampaignLogType, CustomerType, OrderType


@strawberry.type
class CampaignQueries:

    @strawberry.field(permission_classes=[IsAuthenticated])
    def customers(self) -> List[CustomerType]:
        return Customer.objects.all()

    @strawberry.field(permission_classes=[IsAuthenticated])
    def orders(self) -> List[OrderType]:
        return Order.objects.select_related('customer').all()

    @strawberry.field(permission_classes=[IsAuthenticated])
    def campaigns(self) -> List[CampaignType]:
        return with_log_counts(Campaign.objects.all())

    @strawberry.field(permission_classes=[IsAuthenticated])
    def campaign(self, id: int) -> Optional[CampaignType]:
        return with_log_counts(Campaign.objects.filter(id=id)).first()

    @strawberry.field(permission_classes=[IsAuthenticated])
    def campaign_logs(self, campaign_id: Optional[int] = None) -> List[CampaignLogType]:
        logs = CampaignLog.objects.select_related('campaign', 'customer')
        if campaign_id is not None:
            logs = logs.filter(campaign_id=campaign_id)
        return logs
