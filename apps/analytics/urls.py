from django.urls import path
from . import views

app_name = 'analytics'

urlpatterns = [
    # Transaction statistics
    path('transactions/stats/', views.transaction_stats, name='transaction-stats'),
    path('transactions/metrics/', views.transaction_metrics, name='transaction-metrics'),

    # Leaderboards
    path('merchants/top/', views.top_merchants, name='top-merchants'),

    # Listing rollups
    path('products/rollup/', views.product_rollups, name='product-rollups'),
]
