import logging
from django.db import transaction
from rest_framework import viewsets, mixins, status
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from apps.customers.models import Customer
from .delivery import DeliveryOrchestrator, delete_campaign, launch_campaign, report_delivery_outcome
from .exceptions import DeliveryReportingError, NotFoundError
from .models import Campaign, CampaignLog
from .segments import evaluate_segment
from .serializers import (
    AudiencePreviewSerializer,
    CampaignLogSerializer,
    CampaignSerializer,
    DeliveryReceiptSerializer,
    VendorSendSerializer,
)
from .stats import campaign_stats

logger = logging.getLogger(__name__)


class CampaignViewSet(mixins.ListModelMixin,
                      mixins.RetrieveModelMixin,
                      mixins.CreateModelMixin,
                      mixins.DestroyModelMixin,
                      viewsets.GenericViewSet):
    """Campaigns are immutable once created: no update endpoint."""

    permission_classes = [IsAuthenticated]
    serializer_class = CampaignSerializer
    queryset = Campaign.objects.all()
    lookup_value_regex = r'\d+'

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        with transaction.atomic():
            campaign = serializer.save(created_by=request.user)
            audience = evaluate_segment(Customer.objects.all(), campaign.filters, campaign.logic)
            # Delivery is fire-and-forget: broker errors are logged, not raised
            transaction.on_commit(lambda: launch_campaign(campaign, audience), robust=True)

        logger.info(f"Campaign {campaign.pk} created by {request.user.pk}: {len(audience)} matched")
        return Response({
            'campaign': serializer.data,
            'matchedCustomers': len(audience)
        }, status=status.HTTP_201_CREATED)

    def destroy(self, request, *args, **kwargs):
        try:
            delete_campaign(kwargs['pk'])
        except NotFoundError:
            return Response({'error': 'Campaign not found'}, status=status.HTTP_404_NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=['get'])
    def stats(self, request, pk=None):
        return Response(campaign_stats(self.get_object()))

    @action(detail=False, methods=['post'], url_path='preview-audience')
    def preview_audience(self, request):
        serializer = AudiencePreviewSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        audience = evaluate_segment(
            Customer.objects.all(),
            serializer.validated_data['filters'],
            serializer.validated_data['logic']
        )
        return Response({'audienceSize': len(audience)})


class CampaignLogViewSet(mixins.ListModelMixin,
                         mixins.CreateModelMixin,
                         viewsets.GenericViewSet):
    permission_classes = [IsAuthenticated]
    serializer_class = CampaignLogSerializer
    queryset = CampaignLog.objects.select_related('campaign', 'customer')

    def get_queryset(self):
        queryset = super().get_queryset()
        campaign_id = self.request.query_params.get('campaign')
        if campaign_id:
            queryset = queryset.filter(campaign_id=campaign_id)
        log_status = self.request.query_params.get('status')
        if log_status:
            queryset = queryset.filter(status=log_status.upper())
        return queryset

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        log, created = report_delivery_outcome(
            data['campaign'].pk, data['customer'].pk, data['status'], data['vendor_response']
        )
        return Response(
            self.get_serializer(log).data,
            status=status.HTTP_201_CREATED if created else status.HTTP_200_OK
        )

    @action(detail=False, methods=['post'], url_path='update-status')
    def update_status(self, request):
        """Delivery receipt: upsert the log for (campaign, customer)"""
        serializer = DeliveryReceiptSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            log, created = report_delivery_outcome(
                data['campaignId'], data['customerId'], data['status'], data['vendorResponse']
            )
        except NotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(
            self.get_serializer(log).data,
            status=status.HTTP_201_CREATED if created else status.HTTP_200_OK
        )


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def send_message(request):
    """Simulated vendor: decide the outcome and report the receipt"""
    serializer = VendorSendSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    try:
        result = DeliveryOrchestrator().attempt(data['campaignId'], data['customerId'])
    except DeliveryReportingError as e:
        if isinstance(e.cause, NotFoundError):
            return Response({'error': str(e.cause)}, status=status.HTTP_404_NOT_FOUND)
        logger.error(f"Vendor send failed to report: {e}")
        return Response({'error': str(e)}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    return Response({'status': 'processed', 'outcome': result['status']})
