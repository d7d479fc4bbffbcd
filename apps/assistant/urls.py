from django.urls import path
from . import views

urlpatterns = [
    path('suggest-message/', views.suggest_message, name='suggest_message'),
    path('summarize-performance/', views.summarize_performance, name='summarize_performance'),
]
