"""
Management command to seed the stores with sample data.

Usage:
    python manage.py seed_db           # Seed with default data
    python manage.py seed_db --clear   # Clear existing records first
"""
from datetime import timedelta

from django.core.management.base import BaseCommand
from django.utils import timezone

from core.models import User
from core.storage import get_stores
from operators.services import add_operator
from trains.services import add_train
from riders.services import add_user
from bookings.services import create_ticket


class Command(BaseCommand):
    help = 'Seed the stores with sample operators, trains and users'

    def add_arguments(self, parser):
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Clear existing records before seeding',
        )

    def handle(self, *args, **options):
        stores = get_stores()

        if options['clear']:
            self.stdout.write('Clearing existing records...')
            stores.clear()
            self.stdout.write(self.style.WARNING('  Cleared operators, trains, users and tickets'))

        self.stdout.write('Seeding stores...')

        with stores.atomic():
            admin = self.create_admin()
            operator = add_operator(stores, {
                'name': 'NorthRail',
                'address': '1 Station Road',
                'phone_number': '5550100',
            }, caller=admin)
            self.stdout.write(f'  Registered operator: {operator.name}')

            trains = self.create_trains(stores, operator.name)
            riders = self.create_riders(stores)
            if trains and riders:
                info = create_ticket(stores, {
                    'train_id': trains[0].id,
                    'user_id': riders[0].id,
                    'number_of_seats': 2,
                })
                self.stdout.write(f"  Booked ticket {info['id']} for {info['user_name']}")

        self.stdout.write(self.style.SUCCESS('Stores seeded successfully!'))
        self.print_summary(stores)

    def create_admin(self):
        admin, created = User.objects.get_or_create(
            email='admin@railbook.example',
            defaults={
                'name': 'Admin User',
                'is_admin': True,
                'is_staff': True,
            }
        )
        if created:
            admin.set_password('Admin@123')
            admin.save()
            self.stdout.write('  Created admin: admin@railbook.example / Admin@123')
        return admin

    def create_trains(self, stores, operator_name):
        trains_data = [
            ('Northern Express', 6, '5h40m', 4500, 120),
            ('Coastal Sprinter', 30, '3h15m', 2800, 80),
            ('Highland Sleeper', 48, '11h05m', 7200, 60),
        ]
        now = timezone.now()

        trains = []
        for name, hours_ahead, duration, price, seats in trains_data:
            if stores.trains.find(name=name) is not None:
                continue
            departure = now + timedelta(days=1, hours=hours_ahead)
            train = add_train(stores, {
                'name': name,
                'operator': operator_name,
                'departure_time': departure.isoformat(),
                'arrival_time': (departure + timedelta(hours=6)).isoformat(),
                'time_taken': duration,
                'price': price,
                'available_seats': seats,
            })
            trains.append(train)
            self.stdout.write(f'  Added train: {train.name} ({seats} seats)')
        return trains

    def create_riders(self, stores):
        riders_data = [
            ('Alice Moreau', '5550101', 'alice@example.com'),
            ('Bram Okafor', '5550102', 'bram@example.com'),
        ]
        riders = []
        for name, phone, email in riders_data:
            if stores.users.find(email=email) is not None:
                continue
            rider = add_user(stores, {'name': name, 'phone_number': phone, 'email': email})
            riders.append(rider)
            self.stdout.write(f'  Added user: {name}')
        return riders

    def print_summary(self, stores):
        self.stdout.write('\n' + '=' * 50)
        self.stdout.write('Store Summary:')
        self.stdout.write(f'  Operators: {len(stores.operators)}')
        self.stdout.write(f'  Trains: {len(stores.trains)}')
        self.stdout.write(f'  Users: {len(stores.users)}')
        self.stdout.write(f'  Tickets: {len(stores.tickets)}')
        self.stdout.write('=' * 50)
        self.stdout.write('\nCredentials:')
        self.stdout.write('  Admin: admin@railbook.example / Admin@123')
        self.stdout.write('=' * 50 + '\n')
