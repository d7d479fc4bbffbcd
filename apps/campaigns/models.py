from django.conf import settings
from django.db import models


class Campaign(models.Model):
    class Meta:
        app_label = 'campaigns'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['status'], name='campaign_status_idx'),
            models.Index(fields=['created_at'], name='campaign_created_at_idx'),
        ]

    STATUS_CHOICES = [
        ('PENDING', 'Pending'),
        ('SENT', 'Sent'),
    ]

    LOGIC_CHOICES = [
        ('AND', 'AND'),
        ('OR', 'OR'),
    ]

    name = models.CharField(max_length=200)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='campaigns'
    )
    filters = models.JSONField(default=list)  # [{"key": "minSpend", "value": 1000}]
    logic = models.CharField(max_length=3, choices=LOGIC_CHOICES, default='AND')
    message = models.TextField()
    objective = models.TextField(blank=True, default='')
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='PENDING')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.name


class CampaignLog(models.Model):
    """Delivery outcome for one (campaign, customer) attempt."""

    class Meta:
        app_label = 'campaigns'
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(
                fields=['campaign', 'customer'],
                name='unique_log_per_campaign_customer'
            )
        ]
        indexes = [
            models.Index(fields=['campaign', 'status'], name='log_campaign_status_idx'),
        ]

    STATUS_CHOICES = [
        ('SENT', 'Sent'),
        ('FAILED', 'Failed'),
    ]

    campaign = models.ForeignKey(Campaign, on_delete=models.CASCADE, related_name='logs')
    customer = models.ForeignKey(
        'customers.Customer', on_delete=models.CASCADE, related_name='campaign_logs'
    )
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default='SENT')
    vendor_response = models.TextField(blank=True, default='')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
