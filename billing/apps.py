from django.apps import AppConfig


class BillingConfig(AppConfig):
    name = 'billing'
    verbose_name = 'Billing'

    def ready(self):
        from .storage import MemoryBillStore

        # One store per process; views receive it explicitly through urls.py.
        self.store = MemoryBillStore()
