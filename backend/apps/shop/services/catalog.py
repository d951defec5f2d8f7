"""
Catalog service: products, categories, showcase designs and stock levels
"""

from typing import Optional

from django.db import transaction

from .. import conf
from ..constants import InventoryChangeType
from ..domain.exceptions import ValidationError
from ..infrastructure.storage import upload_product_image
from ..models import Category, Design, InventoryLog, Product, ProductImage
from .base import BaseShopService


class CatalogService(BaseShopService):
    """Service for catalog reads and admin catalog writes"""

    def list_products(self):
        return Product.objects.select_related('category').prefetch_related('images')

    def get_product(self, product_id) -> Product:
        return self.get_object(self.list_products(), 'Product', pk=product_id)

    def products_by_category(self, category_id):
        return self.list_products().filter(category_id=category_id)

    def list_categories(self):
        return Category.objects.all()

    def active_designs(self):
        return Design.objects.filter(is_active=True).order_by('display_order')

    def delete_product(self, product: Product):
        self.log_info('Product deleted', {'product_id': str(product.pk), 'name': product.name})
        product.delete()

    def update_stock(self, product: Product, quantity: int, reason: str = '', actor=None,
                     change_type: Optional[str] = None) -> Product:
        """
        Set the stock level, derive stock_status and write an InventoryLog row.

        Dropping below the low-stock threshold queues an alert.
        """
        if quantity is None or int(quantity) < 0:
            raise ValidationError('Stock quantity cannot be negative', details={'quantity': quantity})
        quantity = int(quantity)
        threshold = conf.low_stock_threshold()

        with transaction.atomic():
            product = Product.objects.select_for_update().get(pk=product.pk)
            previous = product.stock_quantity
            product.stock_quantity = quantity
            product.save(update_fields=['stock_quantity', 'updated_at'])

            if change_type is None:
                change_type = InventoryChangeType.RESTOCK if quantity > previous else InventoryChangeType.ADJUSTMENT
            InventoryLog.objects.create(
                product=product,
                change_type=change_type,
                quantity_change=quantity - previous,
                previous_quantity=previous,
                new_quantity=quantity,
                reason=reason,
                created_by=actor if actor is not None and actor.is_authenticated else None,
            )

            if previous >= threshold > quantity:
                product_id = str(product.pk)
                transaction.on_commit(lambda: self.schedule_low_stock_alert(product_id))

        self.log_info(f"Stock for {product.name}: {previous} -> {quantity}", {
            'product_id': str(product.pk), 'stock_status': product.stock_status,
        })
        return product

    def schedule_low_stock_alert(self, product_id: str):
        from ..tasks import send_low_stock_alert
        send_low_stock_alert.delay(product_id)

    def add_image(self, product: Product, upload, image_alt: str = '') -> ProductImage:
        """Upload an image file and attach it to the product"""
        url = upload_product_image(upload)
        display_order = product.images.count()
        image = ProductImage.objects.create(
            product=product,
            image_url=url,
            image_alt=image_alt or product.name,
            display_order=display_order,
        )
        if not product.image_url:
            product.image_url = url
            product.image_alt = image.image_alt
            product.save(update_fields=['image_url', 'image_alt', 'updated_at'])
        return image

