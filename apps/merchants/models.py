# ==========================================
# apps/merchants/models.py
# ==========================================

from django.db import models
from django.core.validators import MinValueValidator
from django.utils import timezone
from decimal import Decimal


class SoftDeleteQuerySet(models.QuerySet):

    def alive(self):
        return self.filter(deleted_at__isnull=True)

    def dead(self):
        return self.filter(deleted_at__isnull=False)


class SoftDeleteManager(models.Manager.from_queryset(SoftDeleteQuerySet)):
    """Default manager hiding soft-deleted rows."""

    def get_queryset(self):
        return super().get_queryset().alive()


class SoftDeleteModel(models.Model):
    """
    Abstract base for rows that are hidden instead of removed.

    ``objects`` only sees live rows, ``all_objects`` sees everything.
    Related managers (``merchant.products``) use the default manager, so
    soft-deleted children drop out of relation counts as well.
    """

    deleted_at = models.DateTimeField(null=True, blank=True, db_index=True)

    objects = SoftDeleteManager()
    all_objects = SoftDeleteQuerySet.as_manager()

    class Meta:
        abstract = True

    @property
    def is_deleted(self):
        return self.deleted_at is not None


class Merchant(SoftDeleteModel):
    """Business that sells products and awards points on transactions."""

    name = models.CharField(max_length=200, db_index=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'merchants'
        ordering = ['name']

    def __str__(self):
        return self.name


class Product(SoftDeleteModel):
    """Merchant product that points rules attach to."""

    merchant = models.ForeignKey(
        Merchant,
        on_delete=models.CASCADE,
        related_name='products'
    )
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    currency = models.CharField(max_length=3, default='PHP')
    stock = models.PositiveIntegerField(default=0)

    # Sync with merchant's own catalogue
    external_id = models.CharField(max_length=100, null=True, blank=True)
    source = models.CharField(max_length=50, blank=True)
    last_synced_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'products'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['merchant', 'stock'], name='products_merchant_stock_idx'),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=['external_id'],
                condition=models.Q(deleted_at__isnull=True, external_id__isnull=False),
                name='unique_live_product_external_id',
            ),
        ]

    def __str__(self):
        return f"{self.name} ({self.merchant.name})"


class RuleType(models.TextChoices):
    PURCHASE_BASED = 'purchase_based', 'Purchase Based'
    REFERRAL = 'referral', 'Referral'
    BONUS = 'bonus', 'Bonus'


class PointsRule(models.Model):
    """Point-earning rule attached to a product."""

    product = models.ForeignKey(
        Product,
        on_delete=models.CASCADE,
        related_name='points_rules'
    )
    rule_type = models.CharField(
        max_length=30,
        choices=RuleType.choices,
        default=RuleType.PURCHASE_BASED
    )
    parameters = models.JSONField(default=dict, blank=True)
    priority = models.IntegerField(default=0)
    created_at = models.DateTimeField(default=timezone.now, editable=False)

    class Meta:
        db_table = 'points_rules'
        ordering = ['-priority', 'id']

    def __str__(self):
        return f"{self.get_rule_type_display()} rule for {self.product.name}"
