class CampaignError(Exception):
    """Base class for campaign delivery errors"""


class NotFoundError(CampaignError):
    pass


class DeliveryReportingError(CampaignError):
    """The vendor outcome was decided but could not be recorded.

    The attempt's outcome is lost; it only shows up as a missing log row.
    """

    def __init__(self, campaign_id, customer_id, status, cause=None):
        self.campaign_id = campaign_id
        self.customer_id = customer_id
        self.status = status
        self.cause = cause
        super().__init__(
            f"Could not record {status} outcome for campaign {campaign_id}, "
            f"customer {customer_id}: {cause}"
        )
