# ==========================================
# apps/merchants/admin.py
# ==========================================

from django.contrib import admin
from apps.analytics.conf import analytics_setting
from apps.analytics.services import has_related, low_stock, with_rollup
from apps.merchants.models import Merchant, PointsRule, Product


class TrashedFilter(admin.SimpleListFilter):
    """Live rows by default, optionally with or only soft-deleted ones."""
    title = 'deleted'
    parameter_name = 'trashed'

    def lookups(self, request, model_admin):
        return (
            ('with', 'With deleted'),
            ('only', 'Only deleted'),
        )

    def queryset(self, request, queryset):
        if self.value() == 'with':
            return queryset
        if self.value() == 'only':
            return queryset.dead()
        return queryset.alive()


class LowStockFilter(admin.SimpleListFilter):
    title = 'stock'
    parameter_name = 'low_stock'

    def lookups(self, request, model_admin):
        return (
            ('yes', f"Low Stock (≤ {analytics_setting('LOW_STOCK_THRESHOLD')})"),
        )

    def queryset(self, request, queryset):
        if self.value() == 'yes':
            return low_stock(queryset)
        return queryset


class HasPointsRulesFilter(admin.SimpleListFilter):
    title = 'points rules'
    parameter_name = 'has_points_rules'

    def lookups(self, request, model_admin):
        return (
            ('yes', 'Has Points Rules'),
        )

    def queryset(self, request, queryset):
        if self.value() == 'yes':
            return has_related(queryset, 'points_rules')
        return queryset


class PointsRuleInline(admin.TabularInline):
    """Inline admin for a product's points rules."""
    model = PointsRule
    extra = 1
    fields = ['rule_type', 'priority', 'parameters']


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    """Admin listing for products with their points rule count."""

    list_display = [
        'name',
        'merchant',
        'price',
        'stock',
        'points_rules_count',
        'created_at',
    ]
    list_filter = [
        TrashedFilter,
        'merchant',
        'currency',
        LowStockFilter,
        HasPointsRulesFilter,
    ]
    search_fields = ['name', 'merchant__name', 'external_id']
    readonly_fields = ['created_at', 'updated_at', 'last_synced_at']
    inlines = [PointsRuleInline]
    ordering = ['-created_at']
    list_select_related = ['merchant']

    def get_queryset(self, request):
        """Include soft-deleted rows; TrashedFilter narrows them."""
        qs = Product.all_objects.get_queryset()
        return with_rollup(qs, 'points_rules')

    @admin.display(description='Points Rules', ordering='points_rules_count')
    def points_rules_count(self, obj):
        return obj.points_rules_count


@admin.register(Merchant)
class MerchantAdmin(admin.ModelAdmin):
    """Admin listing for merchants with product and transaction counts."""

    list_display = [
        'name',
        'is_active',
        'products_count',
        'transactions_count',
        'created_at',
    ]
    list_filter = [TrashedFilter, 'is_active']
    search_fields = ['name']
    readonly_fields = ['created_at', 'updated_at']
    ordering = ['name']

    def get_queryset(self, request):
        qs = Merchant.all_objects.get_queryset()
        qs = with_rollup(qs, 'products')
        return with_rollup(qs, 'transactions')

    @admin.display(description='Products', ordering='products_count')
    def products_count(self, obj):
        return obj.products_count

    @admin.display(description='Transactions', ordering='transactions_count')
    def transactions_count(self, obj):
        return obj.transactions_count


@admin.register(PointsRule)
class PointsRuleAdmin(admin.ModelAdmin):
    list_display = ['product', 'rule_type', 'priority', 'created_at']
    list_filter = ['rule_type']
    search_fields = ['product__name']
    list_select_related = ['product', 'product__merchant']
