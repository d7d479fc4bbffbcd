from django.urls import path
from . import views

urlpatterns = [
    path('dashboard/', views.dashboard, name='dashboard'),
    path('performance/', views.campaign_performance, name='campaign_performance'),
]
