from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone
from decimal import Decimal


class TransactionQuerySet(models.QuerySet):

    def in_window(self, window, field='created_at'):
        """Rows whose ``field`` falls inside ``window``."""
        return self.filter(**window.lookups(field))

    def amount_between(self, min_amount=None, max_amount=None):
        queryset = self
        if min_amount is not None:
            queryset = queryset.filter(amount__gte=min_amount)
        if max_amount is not None:
            queryset = queryset.filter(amount__lte=max_amount)
        return queryset

    def for_merchant(self, merchant_id):
        return self.filter(merchant_id=merchant_id)


class Transaction(models.Model):
    """Customer purchase at a merchant and the points it earned."""

    merchant = models.ForeignKey(
        'merchants.Merchant',
        on_delete=models.PROTECT,
        related_name='transactions'
    )
    # Walk-in sales carry no customer
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='transactions'
    )

    amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    awarded_points = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField(default=timezone.now, editable=False, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = TransactionQuerySet.as_manager()

    class Meta:
        db_table = 'transactions'
        indexes = [
            models.Index(fields=['merchant', 'created_at'], name='txn_merchant_created_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"#{self.pk} {self.merchant.name} - {self.amount}"
