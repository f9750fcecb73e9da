"""
Back Office Django adapter URL routing.
"""

from django.urls import path

from adapters.django_api import views


urlpatterns = [
    path("reports/journal-ledger", views.journal_ledger_view),
    path("reports/stock", views.stock_report_view),
    path("reports/profit-loss", views.profit_loss_view),
    path("reports/dashboard", views.dashboard_view),
]
