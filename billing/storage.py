import logging
import threading
from typing import Dict, List, Optional

from django.utils import timezone

from .models import Bill, NewBill

logger = logging.getLogger(__name__)


class BillingError(Exception):
    """Base error for bill storage."""


class BillNumberExists(BillingError):
    def __init__(self, bill_number: str):
        super().__init__(f"Bill number already exists: {bill_number}")
        self.bill_number = bill_number


class MemoryBillStore:
    """
    In-memory bill repository.

    Bills are indexed by id and by bill number; both indexes hold the same
    Bill objects. Nothing is written to disk, so bills are gone when the
    process exits.
    """

    def __init__(self):
        self._bills: Dict[int, Bill] = {}
        self._bills_by_number: Dict[str, Bill] = {}
        self._current_id = 1
        self._lock = threading.Lock()

    def create(self, new_bill: NewBill) -> Bill:
        """
        Assign the next id and creation time, then index the bill.
        Raises BillNumberExists if the bill number is already taken.
        """
        with self._lock:
            if new_bill.bill_number in self._bills_by_number:
                raise BillNumberExists(new_bill.bill_number)

            bill = Bill.from_new(new_bill, bill_id=self._current_id, created_at=timezone.now())
            self._current_id += 1
            self._bills[bill.id] = bill
            self._bills_by_number[bill.bill_number] = bill

        logger.info(f"Bill stored: id={bill.id} number={bill.bill_number}")
        return bill

    def get_by_id(self, bill_id: int) -> Optional[Bill]:
        with self._lock:
            return self._bills.get(bill_id)

    def get_by_number(self, bill_number: str) -> Optional[Bill]:
        with self._lock:
            return self._bills_by_number.get(bill_number)

    def list_all(self) -> List[Bill]:
        """All bills, most recent first."""
        with self._lock:
            bills = list(self._bills.values())
        # ids are monotonic, so they order bills created within the same clock tick
        return sorted(bills, key=lambda b: (b.created_at, b.id), reverse=True)

    def __len__(self):
        with self._lock:
            return len(self._bills)
