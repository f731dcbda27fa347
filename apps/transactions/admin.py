# ==========================================
# apps/transactions/admin.py
# ==========================================

from datetime import date, timedelta

from django.contrib import admin
from django.contrib.admin.options import IncorrectLookupParameters
from django.utils import timezone

from apps.accounts.models import User
from apps.analytics.conf import analytics_setting
from apps.analytics.exceptions import InvalidWindowError
from apps.analytics.services import between_dates, previous_period, this_period
from apps.merchants.models import Merchant
from apps.transactions.models import Transaction


def _param(params, name):
    """Pop a query parameter; newer Django passes each value as a list."""
    value = params.pop(name, None)
    if isinstance(value, list):
        value = value[-1] if value else None
    return value or None


class CreatedDateRangeFilter(admin.ListFilter):
    """
    Inclusive from/to calendar-date filter on ``created_at``.

    Reads ``created_from`` and ``created_to`` (YYYY-MM-DD); either may be
    omitted. Offers today / this month / last month presets.
    """

    title = 'created date'
    template = 'admin/filter.html'
    from_param = 'created_from'
    to_param = 'created_to'

    def __init__(self, request, params, model, model_admin):
        super().__init__(request, params, model, model_admin)
        self.created_from = _param(params, self.from_param)
        self.created_to = _param(params, self.to_param)

    def expected_parameters(self):
        return [self.from_param, self.to_param]

    def has_output(self):
        return True

    def presets(self):
        now = timezone.now()
        current = this_period(now)
        previous = previous_period(now)
        today = timezone.localdate(now)
        return (
            ('Today', today, today),
            ('This month', timezone.localdate(current.start), today),
            ('Last month', timezone.localdate(previous.start),
             timezone.localdate(previous.end) - timedelta(days=1)),
        )

    def choices(self, changelist):
        yield {
            'selected': self.created_from is None and self.created_to is None,
            'query_string': changelist.get_query_string(remove=self.expected_parameters()),
            'display': 'Any date',
        }
        for label, start, end in self.presets():
            yield {
                'selected': (self.created_from, self.created_to) == (start.isoformat(), end.isoformat()),
                'query_string': changelist.get_query_string({
                    self.from_param: start.isoformat(),
                    self.to_param: end.isoformat(),
                }),
                'display': label,
            }

    def queryset(self, request, queryset):
        if self.created_from is None and self.created_to is None:
            return queryset
        try:
            start = date.fromisoformat(self.created_from) if self.created_from else None
            end = date.fromisoformat(self.created_to) if self.created_to else None
            if start and end:
                return queryset.in_window(between_dates(start, end))
        except (ValueError, InvalidWindowError) as e:
            raise IncorrectLookupParameters(e)
        if start:
            return queryset.filter(created_at__gte=between_dates(start, start).start)
        return queryset.filter(created_at__lt=between_dates(end, end).end)


class AmountRangeFilter(admin.SimpleListFilter):
    title = 'amount'
    parameter_name = 'amount_range'

    RANGES = {
        'under_100': (None, '99.99'),
        '100_499': ('100.00', '499.99'),
        '500_999': ('500.00', '999.99'),
        '1000_up': ('1000.00', None),
    }

    def lookups(self, request, model_admin):
        symbol = analytics_setting('CURRENCY_SYMBOL')
        return (
            ('under_100', f'Under {symbol}100'),
            ('100_499', f'{symbol}100 - {symbol}499.99'),
            ('500_999', f'{symbol}500 - {symbol}999.99'),
            ('1000_up', f'{symbol}1,000 and up'),
        )

    def queryset(self, request, queryset):
        if self.value() in self.RANGES:
            min_amount, max_amount = self.RANGES[self.value()]
            return queryset.amount_between(min_amount, max_amount)
        return queryset


class MerchantFilter(admin.SimpleListFilter):
    """Choices list live merchants only."""
    title = 'merchant'
    parameter_name = 'merchant'

    def lookups(self, request, model_admin):
        return [(str(m.pk), m.name) for m in Merchant.objects.all()]

    def queryset(self, request, queryset):
        if self.value():
            return queryset.for_merchant(self.value())
        return queryset


class CustomerFilter(admin.SimpleListFilter):
    title = 'customer'
    parameter_name = 'customer'

    def lookups(self, request, model_admin):
        customers = User.objects.with_role(analytics_setting('CUSTOMER_ROLE')).order_by('email')
        return [(str(user.pk), user.get_display_name()) for user in customers]

    def queryset(self, request, queryset):
        if self.value():
            return queryset.filter(user_id=self.value())
        return queryset


@admin.register(Transaction)
class TransactionAdmin(admin.ModelAdmin):
    """Admin listing for customer transactions."""

    list_display = [
        'id',
        'merchant',
        'user',
        'amount',
        'awarded_points',
        'created_at',
    ]
    list_filter = [
        MerchantFilter,
        CustomerFilter,
        AmountRangeFilter,
        CreatedDateRangeFilter,
    ]
    search_fields = ['merchant__name', 'user__email']
    readonly_fields = ['created_at', 'updated_at']
    date_hierarchy = 'created_at'
    ordering = ['-created_at']
    list_select_related = ['merchant', 'user']
    raw_id_fields = ['user']
