"""Shared BDD fixtures and step definitions for checkout."""

import pytest
from factories import add_product, register_user
from pytest_bdd import given, parsers


@pytest.fixture()
def error():
    """Container for capturing exceptions raised in When steps."""
    return {"exc": None}


@given(parsers.cfparse('a product "{product_id}" priced {price:f} with {stock:d} in stock'))
def product_in_catalogue(product_id, price, stock):
    add_product(product_id=product_id, price=price, stock=stock)


@given(parsers.cfparse('a registered shopper "{email}"'), target_fixture="shopper_id")
def registered_shopper(email):
    return register_user(email=email)
