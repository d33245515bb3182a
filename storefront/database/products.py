"""Product catalog for the storefront"""

from typing import Optional
from ..models.product import Product, ProductCategory, Inventory

# Seed catalog
PRODUCTS: dict[str, Product] = {
    "prod-001": Product(
        id="prod-001",
        name="Royal Canin Maxi Adult Dry Dog Food",
        slug="royal-canin-maxi-adult",
        description="Complete nutrition for large breed adult dogs from 15 months. Supports bone and joint health.",
        category=ProductCategory.DOG_FOOD,
        brand="Royal Canin",
        price=1899.00,
        sale_price=1749.00,
        image="/static/images/royal-canin-maxi.jpg",
        sizes=["4kg", "10kg", "15kg"],
        inventory=Inventory(quantity=40),
    ),
    "prod-002": Product(
        id="prod-002",
        name="Pedigree Puppy Chicken & Milk",
        slug="pedigree-puppy-chicken-milk",
        description="Wholesome puppy food with calcium for strong bones and DHA for brain development.",
        category=ProductCategory.DOG_FOOD,
        brand="Pedigree",
        price=699.00,
        image="/static/images/pedigree-puppy.jpg",
        sizes=["1.2kg", "3kg"],
        inventory=Inventory(quantity=120),
    ),
    "prod-003": Product(
        id="prod-003",
        name="Whiskas Ocean Fish Adult Cat Food",
        slug="whiskas-ocean-fish",
        description="Tasty ocean fish kibble with omega-3 for a shiny coat.",
        category=ProductCategory.CAT_FOOD,
        brand="Whiskas",
        price=459.00,
        image="/static/images/whiskas-ocean-fish.jpg",
        sizes=["1.1kg", "3kg"],
        inventory=Inventory(quantity=80),
    ),
    "prod-004": Product(
        id="prod-004",
        name="Me-O Tuna Cat Treats",
        slug="me-o-tuna-treats",
        description="Crunchy tuna flavoured treats with taurine. No added colours.",
        category=ProductCategory.TREATS,
        brand="Me-O",
        price=149.00,
        image="/static/images/me-o-treats.jpg",
        inventory=Inventory(quantity=300),
    ),
    "prod-005": Product(
        id="prod-005",
        name="Chicken Jerky Strips",
        slug="chicken-jerky-strips",
        description="Single-ingredient dried chicken breast strips for training rewards.",
        category=ProductCategory.TREATS,
        brand="TinyPaws",
        price=299.00,
        sale_price=249.00,
        image="/static/images/chicken-jerky.jpg",
        inventory=Inventory(quantity=150),
    ),
    "prod-006": Product(
        id="prod-006",
        name="Rope Tug Toy",
        slug="rope-tug-toy",
        description="Braided cotton rope toy for tugging and dental cleaning.",
        category=ProductCategory.TOYS,
        brand="TinyPaws",
        price=249.00,
        image="/static/images/rope-tug.jpg",
        colors=["red", "blue", "green"],
        inventory=Inventory(quantity=60),
    ),
    "prod-007": Product(
        id="prod-007",
        name="Feather Wand Cat Teaser",
        slug="feather-wand-teaser",
        description="Telescopic wand with replaceable feather and bell attachments.",
        category=ProductCategory.TOYS,
        brand="TinyPaws",
        price=199.00,
        image="/static/images/feather-wand.jpg",
        colors=["pink", "purple"],
        inventory=Inventory(quantity=5),
    ),
    "prod-008": Product(
        id="prod-008",
        name="Padded Nylon Dog Harness",
        slug="padded-nylon-harness",
        description="No-pull harness with breathable padding and reflective stitching.",
        category=ProductCategory.ACCESSORIES,
        brand="TinyPaws",
        price=899.00,
        image="/static/images/dog-harness.jpg",
        colors=["black", "orange"],
        sizes=["S", "M", "L", "XL"],
        inventory=Inventory(quantity=35),
    ),
    "prod-009": Product(
        id="prod-009",
        name="Stainless Steel Pet Bowl",
        slug="stainless-steel-bowl",
        description="Anti-skid rubber base, dishwasher safe.",
        category=ProductCategory.ACCESSORIES,
        brand="TinyPaws",
        price=349.00,
        image="/static/images/steel-bowl.jpg",
        sizes=["S", "M", "L"],
        inventory=Inventory(in_stock=False, quantity=0),
    ),
    "prod-010": Product(
        id="prod-010",
        name="Oatmeal & Aloe Pet Shampoo",
        slug="oatmeal-aloe-shampoo",
        description="Soap-free shampoo for sensitive skin. Suitable for dogs and cats.",
        category=ProductCategory.GROOMING,
        brand="TinyPaws",
        price=399.00,
        image="/static/images/oatmeal-shampoo.jpg",
        inventory=Inventory(quantity=90),
    ),
}


class ProductDatabase:
    """In-memory product catalog"""

    def __init__(self, seed: bool = True):
        self.products: dict[str, Product] = (
            {pid: p.model_copy(deep=True) for pid, p in PRODUCTS.items()} if seed else {}
        )

    def add_product(self, product: Product) -> Product:
        self.products[product.id] = product
        return product

    def get_product(self, product_id: str) -> Optional[Product]:
        """Get a product by ID"""
        return self.products.get(product_id)

    def get_by_slug(self, slug: str) -> Optional[Product]:
        return next((p for p in self.products.values() if p.slug == slug), None)

    def get_products_by_ids(self, product_ids: list[str]) -> list[Product]:
        return [self.products[pid] for pid in product_ids if pid in self.products]

    def search_products(
        self,
        query: Optional[str] = None,
        category: Optional[ProductCategory] = None,
        min_price: Optional[float] = None,
        max_price: Optional[float] = None,
        in_stock_only: bool = False,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[list[Product], int]:
        """
        Search products with filters.

        Returns:
            Tuple of (matching products, total count)
        """
        results = list(self.products.values())

        if query:
            query_lower = query.lower()
            results = [
                p for p in results
                if query_lower in p.name.lower()
                or query_lower in p.description.lower()
                or (p.brand and query_lower in p.brand.lower())
            ]

        if category:
            results = [p for p in results if p.category == category]

        # Price filters use the effective (sale) price
        if min_price is not None:
            results = [p for p in results if (p.sale_price or p.price) >= min_price]
        if max_price is not None:
            results = [p for p in results if (p.sale_price or p.price) <= max_price]

        if in_stock_only:
            results = [p for p in results if p.in_stock]

        total = len(results)
        results = results[offset : offset + limit]

        return results, total

    def get_all_products(self) -> list[Product]:
        """Get all products"""
        return list(self.products.values())
