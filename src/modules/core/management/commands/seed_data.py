from __future__ import annotations

import random
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand

from modules.cars.models import Car
from modules.cars.repositories.django_repository import CarDjangoRepository
from modules.orders.constants import OrderStatus, PaymentMethod
from modules.orders.dtos import CreateOrderDTO, CustomerInfoDTO
from modules.orders.models import Order
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.services import OrderService

CATALOG = [
    ("Honda", "Civic", 2006, "2800.00", 182000, "Gasoline", "Manual",
     "Reliable commuter, new tires.", "Air Conditioning, CD Player"),
    ("Toyota", "Corolla", 2004, "2500.00", 205000, "Gasoline", "Automatic",
     "One owner, clean title.", "Power Windows, Cruise Control"),
    ("Ford", "Focus", 2008, "2200.00", 164000, "Gasoline", "Automatic",
     "Runs great, minor dents.", "Bluetooth, Alloy Wheels"),
    ("Chevrolet", "Cobalt", 2007, "1900.00", 171000, "Gasoline", "Manual",
     "Good first car.", "Air Conditioning"),
    ("Nissan", "Sentra", 2005, "1700.00", 198000, "Gasoline", "CVT",
     "Recent oil change and brakes.", "Keyless Entry, Power Locks"),
    ("Toyota", "Prius", 2005, "2950.00", 230000, "Hybrid", "CVT",
     "Hybrid battery replaced in 2021.", "Navigation, Backup Camera"),
    ("Volkswagen", "Jetta TDI", 2003, "2600.00", 240000, "Diesel", "Manual",
     "50 mpg highway.", "Heated Seats, Sunroof"),
    ("Mazda", "3", 2006, "2400.00", 176000, "Gasoline", "Manual",
     "Fun to drive.", "Sport Package"),
    ("Hyundai", "Elantra", 2007, "2100.00", 159000, "Gasoline", "Automatic",
     "Garage kept.", "Air Conditioning, Power Mirrors"),
    ("Nissan", "Leaf", 2012, "2990.00", 98000, "Electric", "Automatic",
     "Around 60 miles of range.", "Quick Charge Port"),
]


class Command(BaseCommand):
    help = "Seed database with demo users, cars and orders."

    def handle(self, *args, **options):
        random.seed(42)
        self.stdout.write("Seeding development data...")

        users_created = self._seed_users()
        cars = self._seed_cars()
        orders_created = self._seed_orders(cars)

        self.stdout.write(
            self.style.SUCCESS(
                "Seed completed: "
                f"users={users_created}, "
                f"cars={len(cars)}, "
                f"orders={orders_created}"
            )
        )

    def _seed_users(self) -> int:
        User = get_user_model()
        created = 0
        if not User.objects.filter(username="admin").exists():
            User.objects.create_superuser(
                "admin", email="admin@autocentral.dev", password="Admin123"
            )
            created += 1
        if not User.objects.filter(username="buyer").exists():
            User.objects.create_user(
                "buyer", email="buyer@autocentral.dev", password="Buyer123", phone="+15550100"
            )
            created += 1
        return created

    def _seed_cars(self) -> list[Car]:
        self.stdout.write("Creating cars...")
        cars: list[Car] = []
        for make, model, year, price, mileage, fuel, gearbox, description, features in CATALOG:
            car, _ = Car.objects.get_or_create(
                make=make,
                model=model,
                year=year,
                defaults={
                    "price": Decimal(price),
                    "mileage": mileage,
                    "fuel_type": fuel,
                    "transmission": gearbox,
                    "description": description,
                    "images": [f"cars/demo-{make.lower()}-{year}.jpg"],
                    "features": [tag.strip() for tag in features.split(",")],
                },
            )
            cars.append(car)
        self.stdout.write(self.style.SUCCESS("Creating cars... Done!"))
        return cars

    def _seed_orders(self, cars: list[Car]) -> int:
        self.stdout.write("Creating orders...")
        if Order.objects.exists():
            self.stdout.write(self.style.WARNING("Skipping orders (already seeded)."))
            return 0

        service = OrderService(
            order_repository=OrderDjangoRepository(),
            car_repository=CarDjangoRepository(),
        )
        buyer = get_user_model().objects.filter(username="buyer").first()
        progressions = [
            [],
            [OrderStatus.CONFIRMED],
            [OrderStatus.CONFIRMED, OrderStatus.PROCESSING, OrderStatus.COMPLETED],
            [OrderStatus.CANCELLED],
        ]

        created = 0
        available = [car for car in cars if car.is_available]
        for car, steps in zip(random.sample(available, k=min(4, len(available))), progressions):
            order = service.create_order(
                CreateOrderDTO(
                    car_id=car.id,
                    customer=CustomerInfoDTO(
                        name="Demo Buyer",
                        email="buyer@autocentral.dev",
                        phone="+1 (555) 010-0000",
                        address="100 Main St, Springfield",
                    ),
                    payment_method=random.choice(PaymentMethod.values),
                    user_id=buyer.id if buyer else None,
                )
            )
            for step in steps:
                service.update_status(order.id, step, notes="Seeded")
            created += 1

        self.stdout.write(self.style.SUCCESS("Creating orders... Done!"))
        return created
