from django.urls import path, include
from rest_framework.routers import DefaultRouter
from .views import CampaignViewSet, CampaignLogViewSet, send_message

router = DefaultRouter()
router.register(r'campaigns', CampaignViewSet)
router.register(r'logs', CampaignLogViewSet)

urlpatterns = [
    path('vendor/send-message/', send_message, name='vendor_send_message'),
    path('', include(router.urls)),
]
