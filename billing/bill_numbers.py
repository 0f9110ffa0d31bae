import logging
import random
import re

logger = logging.getLogger(__name__)

BILL_NUMBER_PREFIX = "INV-"
BILL_NUMBER_MIN = 1000
BILL_NUMBER_MAX = 9999

VALID_BILL_NUMBER_REGEX = re.compile(r'^INV-\d{4}$')


def generate_bill_number(rng=random) -> str:
    """Draw a candidate bill number, INV-1000 to INV-9999."""
    return f"{BILL_NUMBER_PREFIX}{rng.randint(BILL_NUMBER_MIN, BILL_NUMBER_MAX)}"


def next_bill_number(store, rng=random) -> str:
    """
    Draw candidates until one is not used by a bill in the store.

    There is no retry limit: once all 9000 numbers are taken this never
    returns.
    """
    attempts = 0
    while True:
        candidate = generate_bill_number(rng)
        attempts += 1
        if store.get_by_number(candidate) is None:
            if attempts > 1:
                logger.debug(f"Bill number {candidate} found after {attempts} draws")
            return candidate
