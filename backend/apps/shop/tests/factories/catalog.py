# apps/shop/tests/factories/catalog.py
from decimal import Decimal

import factory
from factory.django import DjangoModelFactory

from ...models import Category, Design, Product


class CategoryFactory(DjangoModelFactory):
    class Meta:
        model = Category

    name = factory.Sequence(lambda n: f"Category {n}")
    slug = factory.Sequence(lambda n: f"category-{n}")
    description = factory.Faker('sentence')


class ProductFactory(DjangoModelFactory):
    class Meta:
        model = Product

    name = factory.Sequence(lambda n: f"Printed Tee {n}")
    description = factory.Faker('text', max_nb_chars=200)
    price = Decimal('500.00')
    discounted_price = None
    category = factory.SubFactory(CategoryFactory)
    image_url = factory.Sequence(lambda n: f"https://cdn.example.com/products/{n}.jpg")
    colors = factory.LazyFunction(lambda: ['Red', 'Blue'])
    sizes = factory.LazyFunction(lambda: ['S', 'M', 'L'])
    stock_quantity = 20


class DesignFactory(DjangoModelFactory):
    class Meta:
        model = Design

    title = factory.Sequence(lambda n: f"Design {n}")
    image_url = factory.Sequence(lambda n: f"https://cdn.example.com/designs/{n}.jpg")
    is_active = True
    display_order = factory.Sequence(lambda n: n)
