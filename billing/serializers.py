import json

from rest_framework import serializers

from .catalog import CATEGORIES, find_product, get_catalog
from .models import NewBill
from .validators import validate_bill_number, validate_customer_name, validate_phone


# --------------------- BILL ITEMS ---------------------
class BillItemSerializer(serializers.Serializer):
    category = serializers.ChoiceField(choices=CATEGORIES)
    productKey = serializers.CharField(max_length=50)
    name = serializers.CharField(max_length=100)
    price = serializers.FloatField(min_value=0)
    quantity = serializers.IntegerField(min_value=1)
    total = serializers.FloatField(min_value=0)

    def validate(self, data):
        # a known product must be filed under its own category
        found = find_product(data['productKey'], get_catalog())
        if found is not None and found[0] != data['category']:
            raise serializers.ValidationError(
                f"Product '{data['productKey']}' belongs to '{found[0]}', not '{data['category']}'"
            )
        return data


# --------------------- BILLS ---------------------
class BillSerializer(serializers.Serializer):
    id = serializers.IntegerField(read_only=True)
    billNumber = serializers.CharField(source='bill_number', read_only=True)
    customerName = serializers.CharField(source='customer_name', read_only=True)
    customerPhone = serializers.CharField(source='customer_phone', read_only=True)
    snacksTotal = serializers.FloatField(source='snacks_total', read_only=True)
    groceryTotal = serializers.FloatField(source='grocery_total', read_only=True)
    hygieneTotal = serializers.FloatField(source='hygiene_total', read_only=True)
    snacksTax = serializers.FloatField(source='snacks_tax', read_only=True)
    groceryTax = serializers.FloatField(source='grocery_tax', read_only=True)
    hygieneTax = serializers.FloatField(source='hygiene_tax', read_only=True)
    grandTotal = serializers.FloatField(source='grand_total', read_only=True)
    items = serializers.CharField(read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)


class BillCreateSerializer(serializers.Serializer):
    """
    Validates a bill submitted by the counter. Monetary fields may come as
    numbers or numeric strings; items may be a list or its JSON text.
    The store must be passed in the serializer context.
    """
    billNumber = serializers.CharField(max_length=20)
    customerName = serializers.CharField(max_length=100)
    customerPhone = serializers.CharField(max_length=20)
    snacksTotal = serializers.FloatField(min_value=0, required=False, default=0)
    groceryTotal = serializers.FloatField(min_value=0, required=False, default=0)
    hygieneTotal = serializers.FloatField(min_value=0, required=False, default=0)
    snacksTax = serializers.FloatField(min_value=0, required=False, default=0)
    groceryTax = serializers.FloatField(min_value=0, required=False, default=0)
    hygieneTax = serializers.FloatField(min_value=0, required=False, default=0)
    grandTotal = serializers.FloatField(min_value=0, required=False, default=0)
    items = serializers.JSONField()

    def validate_billNumber(self, value):
        ok, msg = validate_bill_number(value)
        if not ok:
            raise serializers.ValidationError(msg)
        return value.strip()

    def validate_customerName(self, value):
        ok, msg = validate_customer_name(value)
        if not ok:
            raise serializers.ValidationError(msg)
        return value.strip()

    def validate_customerPhone(self, value):
        ok, msg = validate_phone(value)
        if not ok:
            raise serializers.ValidationError(msg)
        return value.strip()

    def validate_items(self, value):
        if isinstance(value, str):
            try:
                value = json.loads(value)
            except ValueError:
                raise serializers.ValidationError("Items must be valid JSON")
        if not isinstance(value, list):
            raise serializers.ValidationError("Items must be a list")

        item_serializer = BillItemSerializer(data=value, many=True)
        if not item_serializer.is_valid():
            raise serializers.ValidationError(item_serializer.errors)
        return json.dumps([dict(item) for item in item_serializer.validated_data])

    def create(self, validated_data):
        store = self.context['store']
        new_bill = NewBill(
            bill_number=validated_data['billNumber'],
            customer_name=validated_data['customerName'],
            customer_phone=validated_data['customerPhone'],
            snacks_total=validated_data['snacksTotal'],
            grocery_total=validated_data['groceryTotal'],
            hygiene_total=validated_data['hygieneTotal'],
            snacks_tax=validated_data['snacksTax'],
            grocery_tax=validated_data['groceryTax'],
            hygiene_tax=validated_data['hygieneTax'],
            grand_total=validated_data['grandTotal'],
            items=validated_data['items'],
        )
        return store.create(new_bill)


# --------------------- CALCULATION ---------------------
class CalculationRequestSerializer(serializers.Serializer):
    quantities = serializers.DictField(child=serializers.IntegerField(min_value=0), required=False, default=dict)


# --------------------- PAYMENTS ---------------------
class PaymentIntentRequestSerializer(serializers.Serializer):
    amount = serializers.FloatField(required=False, allow_null=True)
    billNumber = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    customerName = serializers.CharField(required=False, allow_blank=True, allow_null=True)
