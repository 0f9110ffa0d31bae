"""Stripe payment intents over the REST API."""

import logging
from typing import Optional

import requests
from django.conf import settings

logger = logging.getLogger(__name__)

DEFAULT_API_BASE = "https://api.stripe.com"
DEFAULT_CURRENCY = "inr"
DEFAULT_TIMEOUT = 15


class PaymentError(Exception):
    """Base error for the payment processor. Not a billing error."""


class PaymentConfigurationError(PaymentError):
    pass


class InvalidPaymentAmount(PaymentError):
    pass


class PaymentGatewayError(PaymentError):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class StripePaymentClient:
    """Creates payment intents; the hosted checkout finishes the payment."""

    def __init__(self, secret_key: str, api_base: str = DEFAULT_API_BASE,
                 currency: str = DEFAULT_CURRENCY, timeout: float = DEFAULT_TIMEOUT):
        self.secret_key = secret_key
        self.api_base = api_base.rstrip("/")
        self.currency = currency
        self.timeout = timeout

    @classmethod
    def from_settings(cls) -> "StripePaymentClient":
        billing = getattr(settings, "BILLING", {})
        return cls(
            secret_key=getattr(settings, "STRIPE_SECRET_KEY", ""),
            api_base=getattr(settings, "STRIPE_API_BASE", DEFAULT_API_BASE),
            currency=billing.get("CURRENCY", DEFAULT_CURRENCY),
            timeout=billing.get("PAYMENT_TIMEOUT", DEFAULT_TIMEOUT),
        )

    def create_payment_intent(self, amount, bill_number: Optional[str] = None,
                              customer_name: Optional[str] = None) -> str:
        """
        Create a payment intent for amount (in rupees) and return its
        client secret. The amount is sent in paise.
        """
        try:
            amount = float(amount)
        except (TypeError, ValueError):
            raise InvalidPaymentAmount("Valid amount is required")
        if amount <= 0:
            raise InvalidPaymentAmount("Valid amount is required")

        if not self.secret_key:
            raise PaymentConfigurationError("Stripe secret key is not configured")

        payload = {
            "amount": int(round(amount * 100)),
            "currency": self.currency,
            "metadata[billNumber]": bill_number or "N/A",
            "metadata[customerName]": customer_name or "N/A",
        }

        try:
            response = requests.post(
                f"{self.api_base}/v1/payment_intents",
                data=payload,
                auth=(self.secret_key, ""),
                timeout=self.timeout,
            )
        except requests.exceptions.Timeout:
            raise PaymentGatewayError("Payment service timed out")
        except requests.exceptions.ConnectionError:
            raise PaymentGatewayError("Cannot connect to payment service")
        except requests.exceptions.RequestException as e:
            raise PaymentGatewayError(f"Network error: {str(e)}")

        try:
            data = response.json()
        except ValueError:
            data = {}

        if response.status_code != 200:
            message = data.get("error", {}).get("message") or f"Payment service error: {response.status_code}"
            logger.error(f"Payment intent failed for {bill_number}: {message}")
            raise PaymentGatewayError(message, status_code=response.status_code)

        client_secret = data.get("client_secret")
        if not client_secret:
            raise PaymentGatewayError("No client secret received", status_code=response.status_code)

        logger.info(f"Payment intent {data.get('id', '')} created for {bill_number or 'N/A'}")
        return client_secret
