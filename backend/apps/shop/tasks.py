from celery import shared_task
from django.conf import settings
from django.core.mail import send_mail
import logging

from . import conf
from .models import Customer, Product
from .services import CustomerService

logger = logging.getLogger(__name__)


@shared_task
def sync_customer_totals(customer_id):
    """Refresh total_orders and total_spent for one customer"""
    try:
        customer = Customer.objects.get(id=customer_id)
    except Customer.DoesNotExist:
        logger.error(f"Customer {customer_id} not found for totals sync")
        return f"Customer {customer_id} not found"

    CustomerService().sync_totals(customer)
    logger.info(f"Synced totals for customer {customer.email}")
    return f"Totals synced for customer {customer_id}"


@shared_task
def send_low_stock_alert(product_id):
    """Email the store admins that a product is running out"""
    try:
        product = Product.objects.get(id=product_id)
    except Product.DoesNotExist:
        logger.error(f"Product {product_id} not found for low stock alert")
        return f"Product {product_id} not found"

    recipients = conf.store_setting('ALERT_EMAILS')
    if not recipients:
        logger.warning(f"No alert recipients configured; {product.name} is at {product.stock_quantity}")
        return f"No recipients for product {product_id}"

    send_mail(
        subject=f"Low stock: {product.name}",
        message=(
            f"{product.name} has {product.stock_quantity} units left "
            f"(threshold {conf.low_stock_threshold()})."
        ),
        from_email=settings.DEFAULT_FROM_EMAIL,
        recipient_list=list(recipients),
        fail_silently=False,
    )
    logger.info(f"Low stock alert sent for product {product.name}")
    return f"Alert sent for product {product_id}"
