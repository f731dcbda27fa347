"""
Management command to create sample data for the back office dashboard.

Usage:
    python manage.py create_sample_data
    python manage.py create_sample_data --clear --days 90

This creates:
- Roles (admin, merchant, customer)
- 1 staff user and 5 customers
- 4 merchants with products and points rules
- Transactions spread over the current and previous month
"""

from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone
from decimal import Decimal
from datetime import timedelta
import random

from apps.accounts.models import Role, RoleName, User
from apps.merchants.models import Merchant, PointsRule, Product, RuleType
from apps.transactions.models import Transaction


MERCHANTS = {
    'Alpha Mart': [
        ('Rice 5kg', Decimal('320.00'), 40),
        ('Cooking Oil 1L', Decimal('110.00'), 8),
        ('Instant Noodles', Decimal('15.00'), 250),
    ],
    'Beta Bakery': [
        ('Pandesal (10 pcs)', Decimal('50.00'), 60),
        ('Ensaymada', Decimal('35.00'), 5),
    ],
    'Gamma Grocer': [
        ('Eggs (dozen)', Decimal('95.00'), 30),
        ('Coffee 3-in-1 (30 pcs)', Decimal('210.00'), 0),
    ],
    'Delta Deli': [
        ('Ham 500g', Decimal('280.00'), 12),
    ],
}


class Command(BaseCommand):
    help = 'Create sample merchants, products and transactions for the dashboard'

    def add_arguments(self, parser):
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Clear existing data before creating new sample data',
        )
        parser.add_argument(
            '--days',
            type=int,
            default=60,
            help='Spread transactions over this many past days (default: 60)',
        )
        parser.add_argument(
            '--seed',
            type=int,
            default=None,
            help='Random seed for reproducible data',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        rng = random.Random(options['seed'])

        if options['clear']:
            self.stdout.write('Clearing existing data...')
            self.clear_data()

        self.stdout.write('Creating sample data...')

        roles = self.create_roles()
        users = self.create_users(roles)
        merchants = self.create_merchants()
        self.create_products(merchants, rng)
        count = self.create_transactions(merchants, users['customers'], options['days'], rng)

        self.stdout.write(self.style.SUCCESS(
            f'Sample data created successfully! ({count} transactions)'
        ))
        self.stdout.write('')
        self.stdout.write('Back office account:')
        self.stdout.write('  admin@example.com / admin123 (superuser)')

    def clear_data(self):
        """Clear all data from the database."""
        Transaction.objects.all().delete()
        PointsRule.objects.all().delete()
        Product.all_objects.all().delete()
        Merchant.all_objects.all().delete()
        User.objects.filter(is_superuser=False).delete()
        User.objects.filter(email='admin@example.com').delete()

    def create_roles(self):
        self.stdout.write('  Creating roles...')
        return {
            name: Role.objects.get_or_create(name=name)[0]
            for name in RoleName.values
        }

    def create_users(self, roles):
        """Create the back office admin and some customers."""
        self.stdout.write('  Creating users...')

        admin, _ = User.objects.get_or_create(
            email='admin@example.com',
            defaults={
                'display_name': 'Admin User',
                'is_staff': True,
                'is_superuser': True,
            }
        )
        admin.set_password('admin123')
        admin.save()
        admin.roles.add(roles[RoleName.ADMIN])

        customers = []
        for name in ('alice', 'bob', 'charlie', 'dana', 'eli'):
            user, created = User.objects.get_or_create(
                email=f'{name}@example.com',
                defaults={'display_name': name.title()}
            )
            if created:
                user.set_password('password123')
                user.save()
            user.roles.add(roles[RoleName.CUSTOMER])
            customers.append(user)

        return {'admin': admin, 'customers': customers}

    def create_merchants(self):
        self.stdout.write('  Creating merchants...')
        return [
            Merchant.objects.get_or_create(name=name)[0]
            for name in MERCHANTS
        ]

    def create_products(self, merchants, rng):
        """Create products; most get one or more points rules."""
        self.stdout.write('  Creating products and points rules...')

        for merchant in merchants:
            for name, price, stock in MERCHANTS[merchant.name]:
                product, created = Product.objects.get_or_create(
                    merchant=merchant,
                    name=name,
                    defaults={'price': price, 'stock': stock},
                )
                if not created:
                    continue
                for priority in range(rng.randint(0, 3)):
                    PointsRule.objects.create(
                        product=product,
                        rule_type=rng.choice(RuleType.values),
                        parameters={'points_per_peso': rng.choice([0.5, 1, 2])},
                        priority=priority,
                    )

    def create_transactions(self, merchants, customers, days, rng):
        """Create transactions over the last ``days`` days, a few of them walk-ins."""
        self.stdout.write('  Creating transactions...')

        now = timezone.now()
        transactions = []
        for _ in range(days * 3):
            amount = Decimal(rng.randint(0, 200000)) / 100
            transactions.append(Transaction(
                merchant=rng.choice(merchants),
                user=rng.choice(customers + [None]),
                amount=amount,
                awarded_points=int(amount // 10),
                created_at=now - timedelta(
                    days=rng.randint(0, days),
                    minutes=rng.randint(0, 24 * 60),
                ),
            ))
        Transaction.objects.bulk_create(transactions)
        return len(transactions)
