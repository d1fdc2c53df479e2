"""Seed the camera catalog for local development.

Creates the default brands, categories and products. Re-running is
idempotent; existing rows are matched by name and updated in place.
"""

from decimal import Decimal

from catalog.models import Brand, Category, Product
from django.core.management.base import BaseCommand
from django.db import transaction

BRANDS = ["Panasonic", "Canon", "Sony", "Fujifilm", "Nikon", "DJI", "GoPro", "Sigma"]
CATEGORIES = ["Cameras", "Lenses", "Drones", "Accessories"]

PRODUCTS = [
    {
        "name": "Lumix S5IIX",
        "brand": "Panasonic",
        "category": "Cameras",
        "price": "2199",
        "description": (
            "A hybrid powerhouse featuring Phase Hybrid AF, advanced video specs, and unlimited "
            "4K 60p recording. Perfect for content creators."
        ),
        "image_url": "https://m.media-amazon.com/images/I/714e7vyoWGL.jpg",
        "specs": {"resolution": "24.2MP", "video": "6K 30p / 4K 60p", "sensor": "Full-Frame CMOS"},
        "in_stock": 15,
    },
    {
        "name": "EOS R6 Mark II",
        "brand": "Canon",
        "category": "Cameras",
        "price": "2499",
        "description": (
            "Versatile mirrorless camera with high-speed shooting up to 40fps and impressive "
            "low-light performance."
        ),
        "image_url": "https://m.media-amazon.com/images/I/61s5kI0U4cL._AC_UF894,1000_QL80_.jpg",
        "specs": {"resolution": "24.2MP", "video": "4K 60p", "sensor": "Full-Frame CMOS"},
        "in_stock": 8,
    },
    {
        "name": "Alpha 7 IV",
        "brand": "Sony",
        "category": "Cameras",
        "price": "2498",
        "description": (
            "The new baseline for full-frame mirrorless, offering excellent image quality and "
            "AI-based real-time autofocus."
        ),
        "image_url": "https://images.unsplash.com/photo-1516724562728-afc824a36e84?q=80&w=2071&auto=format&fit=crop",
        "specs": {"resolution": "33MP", "video": "4K 60p", "sensor": "Full-Frame Exmor R"},
        "in_stock": 10,
    },
    {
        "name": "X-T5",
        "brand": "Fujifilm",
        "category": "Cameras",
        "price": "1699",
        "description": "Classic dial-based design meets cutting-edge technology with a 40MP APS-C sensor.",
        "image_url": "https://images.unsplash.com/photo-1519638831568-d9897f54ed69?q=80&w=2070&auto=format&fit=crop",
        "specs": {"resolution": "40MP", "video": "6.2K 30p", "sensor": "APS-C X-Trans"},
        "in_stock": 20,
    },
    {
        "name": "Z f",
        "brand": "Nikon",
        "category": "Cameras",
        "price": "1999",
        "description": "Iconic retro design paired with advanced full-frame performance and EXPEED 7 processing.",
        "image_url": "https://m.media-amazon.com/images/I/71UyMxdXNgL.jpg",
        "specs": {"resolution": "24.5MP", "video": "4K 60p", "sensor": "Full-Frame CMOS"},
        "in_stock": 12,
    },
    {
        "name": "Mavic 3 Pro",
        "brand": "DJI",
        "category": "Drones",
        "price": "2199",
        "description": "Triple-camera system with Hasselblad main camera for cinematic aerial photography.",
        "image_url": "https://m.media-amazon.com/images/I/6189PdK3wKL._AC_UF350,350_QL80_.jpg",
        "specs": {"resolution": "20MP", "video": "5.1K 50p", "sensor": "4/3 CMOS"},
        "in_stock": 5,
    },
    {
        "name": "HERO12 Black",
        "brand": "GoPro",
        "category": "Cameras",
        "price": "399",
        "description": (
            "Unbelievable image quality, even better HyperSmooth video stabilization and a huge "
            "boost in battery life."
        ),
        "image_url": "https://images.unsplash.com/photo-1565849904461-04a58ad377e0?q=80&w=1000&auto=format&fit=crop",
        "specs": {"resolution": "27MP", "video": "5.3K 60p", "sensor": "1/1.9 CMOS"},
        "in_stock": 25,
    },
    {
        "name": "24-70mm f/2.8 DG DN Art",
        "brand": "Sigma",
        "category": "Lenses",
        "price": "1099",
        "description": "Flagship standard zoom lens designed for unmatched expressive performance.",
        "image_url": "https://images.unsplash.com/photo-1617005082133-548c4dd27f35?q=80&w=1000&auto=format&fit=crop",
        "specs": {"resolution": "N/A", "video": "N/A", "sensor": "Full-Frame"},
        "in_stock": 8,
    },
    {
        "name": "FE 50mm f/1.2 GM",
        "brand": "Sony",
        "category": "Lenses",
        "price": "1998",
        "description": "Compact F1.2 prime lens with breathtaking G Master resolution and bokeh.",
        "image_url": "https://images.unsplash.com/photo-1617005082133-548c4dd27f35?q=80&w=1000&auto=format&fit=crop",
        "specs": {"resolution": "N/A", "video": "N/A", "sensor": "Full-Frame"},
        "in_stock": 6,
    },
]


class Command(BaseCommand):
    help = "Seed camera brands, categories and products"

    @transaction.atomic
    def handle(self, *args, **options):
        self.stdout.write("Seeding catalog data...")

        brands = {name: Brand.objects.get_or_create(name=name)[0] for name in BRANDS}
        categories = {name: Category.objects.get_or_create(name=name)[0] for name in CATEGORIES}

        created = 0
        for item in PRODUCTS:
            _, was_created = Product.objects.update_or_create(
                name=item["name"],
                brand=brands[item["brand"]],
                defaults={
                    "category": categories[item["category"]],
                    "price": Decimal(item["price"]),
                    "description": item["description"],
                    "image_url": item["image_url"],
                    "specs": item["specs"],
                    "in_stock": item["in_stock"],
                },
            )
            created += int(was_created)

        self.stdout.write(
            self.style.SUCCESS(f"Catalog seed complete ({created} new, {len(PRODUCTS) - created} updated).")
        )
