import logging
import traceback

from django.apps import apps
from django.http import HttpResponse
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from .bill_numbers import next_bill_number
from .calculator import calculate_bill
from .catalog import CATEGORIES, get_catalog, get_tax_rate
from .payments import (
    InvalidPaymentAmount,
    PaymentConfigurationError,
    PaymentGatewayError,
    StripePaymentClient,
)
from .receipts import ReceiptError, render_receipt_pdf
from .serializers import (
    BillCreateSerializer,
    BillSerializer,
    CalculationRequestSerializer,
    PaymentIntentRequestSerializer,
)
from .storage import BillNumberExists

logger = logging.getLogger(__name__)

BILL_NOT_FOUND = {"message": "Bill not found"}


class StoreView(APIView):
    """Base view holding the bill store; urls.py passes the store to as_view()."""
    store = None

    def get_store(self):
        if self.store is None:
            return apps.get_app_config('billing').store
        return self.store


# ----------------- CATALOG -----------------

class ProductListView(APIView):
    def get(self, request):
        try:
            catalog = get_catalog()
            tax_rate = get_tax_rate()
        except Exception:
            logger.error(f"Loading catalog failed: {traceback.format_exc()}")
            return Response({"message": "Failed to fetch products"}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response({
            "categories": {category: catalog.get(category, {}) for category in CATEGORIES},
            "taxRate": tax_rate,
        })


class BillCalculateView(APIView):
    """Price a quantity selection without saving anything."""

    def post(self, request):
        serializer = CalculationRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return Response({"message": "Validation error", "errors": serializer.errors},
                            status=status.HTTP_400_BAD_REQUEST)
        try:
            calculation = calculate_bill(serializer.validated_data['quantities'])
        except Exception:
            logger.error(f"Calculating bill failed: {traceback.format_exc()}")
            return Response({"message": "Failed to calculate bill"}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        logger.debug(f"Calculated {len(calculation.items)} items: subtotal {calculation.subtotal:.2f}, "
                      f"tax {calculation.total_tax:.2f}")
        return Response(calculation.to_dict())


# ----------------- BILLS -----------------

class BillListCreateView(StoreView):
    def get(self, request):
        try:
            bills = self.get_store().list_all()
        except Exception:
            logger.error(f"Fetching bills failed: {traceback.format_exc()}")
            return Response({"message": "Failed to fetch bills"}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response(BillSerializer(bills, many=True).data)

    def post(self, request):
        store = self.get_store()
        serializer = BillCreateSerializer(data=request.data, context={'store': store})
        if not serializer.is_valid():
            logger.warning(f"Bill rejected: {serializer.errors}")
            return Response({"message": "Validation error", "errors": serializer.errors},
                            status=status.HTTP_400_BAD_REQUEST)
        try:
            bill = serializer.save()
        except BillNumberExists:
            return Response({"message": "Bill number already exists"}, status=status.HTTP_400_BAD_REQUEST)
        except Exception:
            logger.error(f"Creating bill failed: {traceback.format_exc()}")
            return Response({"message": "Failed to create bill"}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        logger.info(f"{bill} saved ({bill.grand_total:.2f})")
        return Response(BillSerializer(bill).data, status=status.HTTP_201_CREATED)


class BillDetailView(StoreView):
    def get(self, request, pk):
        bill = self.get_store().get_by_id(pk)
        if bill is None:
            return Response(BILL_NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        return Response(BillSerializer(bill).data)


class BillByNumberView(StoreView):
    def get(self, request, bill_number):
        bill = self.get_store().get_by_number(bill_number)
        if bill is None:
            return Response(BILL_NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        return Response(BillSerializer(bill).data)


class BillReceiptView(StoreView):
    def get(self, request, pk):
        bill = self.get_store().get_by_id(pk)
        if bill is None:
            return Response(BILL_NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        try:
            pdf = render_receipt_pdf(bill)
        except ReceiptError as e:
            return Response({"message": str(e)}, status=status.HTTP_400_BAD_REQUEST)

        response = HttpResponse(pdf, content_type='application/pdf')
        response['Content-Disposition'] = f'inline; filename="{bill.bill_number}.pdf"'
        return response


class GenerateBillNumberView(StoreView):
    def post(self, request):
        try:
            bill_number = next_bill_number(self.get_store())
        except Exception:
            logger.error(f"Generating bill number failed: {traceback.format_exc()}")
            return Response({"message": "Failed to generate bill number"},
                            status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response({"billNumber": bill_number})


# ----------------- PAYMENTS -----------------

class PaymentIntentView(APIView):
    """Create a Stripe payment intent for a bill's grand total."""
    payment_client = None

    def get_payment_client(self):
        if self.payment_client is None:
            return StripePaymentClient.from_settings()
        return self.payment_client

    def post(self, request):
        serializer = PaymentIntentRequestSerializer(data=request.data)
        if not serializer.is_valid():
            if 'amount' in serializer.errors:
                return Response({"message": "Valid amount is required"}, status=status.HTTP_400_BAD_REQUEST)
            return Response({"message": "Validation error", "errors": serializer.errors},
                            status=status.HTTP_400_BAD_REQUEST)
        data = serializer.validated_data

        try:
            client_secret = self.get_payment_client().create_payment_intent(
                data.get('amount'),
                bill_number=data.get('billNumber'),
                customer_name=data.get('customerName'),
            )
        except InvalidPaymentAmount as e:
            return Response({"message": str(e)}, status=status.HTTP_400_BAD_REQUEST)
        except PaymentConfigurationError as e:
            logger.error(f"Payment not configured: {str(e)}")
            return Response({"message": f"Error creating payment intent: {str(e)}"},
                            status=status.HTTP_503_SERVICE_UNAVAILABLE)
        except PaymentGatewayError as e:
            return Response({"message": f"Error creating payment intent: {str(e)}"},
                            status=status.HTTP_502_BAD_GATEWAY)
        except Exception as e:
            logger.error(f"Payment intent failed: {traceback.format_exc()}")
            return Response({"message": f"Error creating payment intent: {str(e)}"},
                            status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response({"clientSecret": client_secret})
