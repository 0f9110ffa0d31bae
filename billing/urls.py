from django.apps import apps
from django.urls import path

from . import views

store = apps.get_app_config('billing').store

urlpatterns = [
    # Catalog endpoints
    path('api/products/', views.ProductListView.as_view(), name='products'),

    # Bills endpoints
    path('api/bills/', views.BillListCreateView.as_view(store=store), name='bills'),
    path('api/bills/calculate/', views.BillCalculateView.as_view(), name='calculate_bill'),
    path('api/bills/generate-number/', views.GenerateBillNumberView.as_view(store=store), name='generate_bill_number'),
    path('api/bills/number/<str:bill_number>/', views.BillByNumberView.as_view(store=store), name='bill_by_number'),
    path('api/bills/<int:pk>/', views.BillDetailView.as_view(store=store), name='bill_detail'),
    path('api/bills/<int:pk>/receipt/', views.BillReceiptView.as_view(store=store), name='bill_receipt'),

    # Payment endpoints
    path('api/create-payment-intent/', views.PaymentIntentView.as_view(), name='create_payment_intent'),
]
