"""
Tests for merchant and product models: soft deletion and catalogue sync keys.
"""
import pytest
from django.db import IntegrityError, transaction
from django.utils import timezone

from apps.merchants.models import Merchant, PointsRule, Product, RuleType


@pytest.mark.django_db
class TestSoftDelete:

    def test_default_manager_hides_deleted(self, merchant):
        merchant.deleted_at = timezone.now()
        merchant.save()

        assert not Merchant.objects.filter(pk=merchant.pk).exists()
        assert Merchant.all_objects.filter(pk=merchant.pk).exists()
        assert merchant.is_deleted

    def test_alive_and_dead(self, make_product):
        live = make_product('Live')
        gone = make_product('Gone', deleted_at=timezone.now())

        assert list(Product.all_objects.alive()) == [live]
        assert list(Product.all_objects.dead()) == [gone]

    def test_related_manager_hides_deleted(self, merchant, make_product):
        make_product('Live')
        make_product('Gone', deleted_at=timezone.now())

        assert merchant.products.count() == 1


@pytest.mark.django_db
class TestProductExternalId:

    def test_live_external_id_unique(self, make_product):
        make_product('First', external_id='SKU-1')

        with pytest.raises(IntegrityError):
            with transaction.atomic():
                make_product('Second', external_id='SKU-1')

    def test_deleted_row_frees_external_id(self, make_product):
        make_product('Old', external_id='SKU-1', deleted_at=timezone.now())

        product = make_product('New', external_id='SKU-1')

        assert product.pk is not None

    def test_many_products_without_external_id(self, make_product):
        make_product('A')
        make_product('B')

        assert Product.objects.filter(external_id__isnull=True).count() == 2


@pytest.mark.django_db
class TestPointsRule:

    def test_ordering_by_priority(self, ruled_product):
        rules = list(ruled_product.points_rules.all())

        assert [rule.rule_type for rule in rules] == [RuleType.BONUS, RuleType.PURCHASE_BASED]

    def test_str(self, ruled_product):
        rule = PointsRule.objects.filter(rule_type=RuleType.BONUS).get()

        assert str(rule) == 'Bonus rule for Ruled'
