"""Catalogue stocking — add and seed products."""

import json

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Float, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.domain import logger, storefront

# Demo catalogue loaded by POST /seed-products and `manage.py seed-products`
DEFAULT_SEED = [
    {"product_id": "prod1", "name": "Test Product", "price": 10.0, "stock": 100},
]


@storefront.command(part_of="Product")
class AddProduct:
    product_id = String(required=True, max_length=50)
    name = String(required=True, max_length=255)
    price = Float(required=True, min_value=0.0)
    stock = Integer(required=True, min_value=0)


@storefront.command(part_of="Product")
class SeedProducts:
    """Insert every product that is not already in the catalogue."""

    products = Text()  # JSON: list of {product_id, name, price, stock}


def _exists(repo, product_id) -> bool:
    try:
        repo.get(product_id)
    except ObjectNotFoundError:
        return False
    return True


@storefront.command_handler(part_of=Product)
class StockingHandler:
    @handle(AddProduct)
    def add_product(self, command):
        repo = current_domain.repository_for(Product)
        if _exists(repo, command.product_id):
            raise ValidationError({"product_id": [f"Product {command.product_id} already exists"]})

        product = Product.add(
            product_id=command.product_id,
            name=command.name,
            price=command.price,
            stock=command.stock,
        )
        repo.add(product)
        return product.product_id

    @handle(SeedProducts)
    def seed_products(self, command):
        """Returns the number of products inserted; existing ones are skipped."""
        repo = current_domain.repository_for(Product)
        inserted = 0
        products = json.loads(command.products) if command.products else DEFAULT_SEED
        for data in products:
            if _exists(repo, data["product_id"]):
                continue
            repo.add(Product.add(**data))
            inserted += 1

        logger.info("catalogue_seeded", inserted=inserted)
        return inserted
