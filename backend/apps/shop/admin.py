# apps/shop/admin.py

"""
Django admin configuration for storefront models
"""

from django.contrib import admin

from .models import (
    Category, Customer, Design, Discount, InventoryLog, Order, OrderItem,
    OrderStatusHistory, Product, ProductImage, Return, ReturnItem, Review,
    ReviewModerationLog,
)


class ProductImageInline(admin.TabularInline):
    model = ProductImage
    extra = 0


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ('name', 'slug')
    search_fields = ('name',)
    prepopulated_fields = {'slug': ('name',)}


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    """Stock levels are changed through the API so each change is logged"""

    list_display = ('name', 'category', 'price', 'discounted_price', 'stock_quantity', 'stock_status')
    list_filter = ('stock_status', 'category')
    search_fields = ('name', 'description')
    readonly_fields = ('stock_quantity', 'stock_status', 'created_at', 'updated_at')
    inlines = [ProductImageInline]


@admin.register(Design)
class DesignAdmin(admin.ModelAdmin):
    list_display = ('title', 'badge', 'is_active', 'display_order')
    list_filter = ('is_active',)
    list_editable = ('is_active', 'display_order')


@admin.register(InventoryLog)
class InventoryLogAdmin(admin.ModelAdmin):
    list_display = ('product', 'change_type', 'quantity_change', 'new_quantity', 'created_by', 'created_at')
    list_filter = ('change_type',)
    search_fields = ('product__name', 'reason')


@admin.register(Discount)
class DiscountAdmin(admin.ModelAdmin):
    list_display = (
        'code', 'discount_type', 'discount_value', 'usage_count', 'usage_limit',
        'valid_until', 'is_active'
    )
    list_filter = ('discount_type', 'is_active')
    search_fields = ('code', 'description')
    readonly_fields = ('usage_count',)


@admin.register(Customer)
class CustomerAdmin(admin.ModelAdmin):
    list_display = ('email', 'full_name', 'phone', 'total_orders', 'total_spent')
    search_fields = ('email', 'full_name', 'phone')
    readonly_fields = ('total_orders', 'total_spent')


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    readonly_fields = (
        'product', 'product_name', 'price', 'discounted_price', 'quantity',
        'color', 'size', 'subtotal'
    )


class OrderStatusHistoryInline(admin.TabularInline):
    model = OrderStatusHistory
    extra = 0
    readonly_fields = ('previous_status', 'new_status', 'changed_by', 'created_at')


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """Orders; status moves through the API state machine only"""

    list_display = ('order_number', 'customer_name', 'status', 'final_amount', 'payment_method', 'created_at')
    list_filter = ('status', 'payment_method', 'created_at')
    search_fields = ('order_number', 'customer_email', 'customer_name')
    readonly_fields = (
        'order_number', 'status', 'total_amount', 'discount_amount', 'shipping_cost',
        'final_amount', 'discount_code', 'items_count', 'created_at', 'updated_at'
    )
    inlines = [OrderItemInline, OrderStatusHistoryInline]

    fieldsets = (
        ('Order Information', {
            'fields': ('order_number', 'status', 'user', 'customer', 'created_at', 'updated_at')
        }),
        ('Customer', {
            'fields': ('customer_name', 'customer_email', 'customer_phone', 'shipping_address', 'billing_address')
        }),
        ('Financial Summary', {
            'fields': (
                'total_amount', 'discount_amount', 'shipping_cost',
                'final_amount', 'discount_code', 'payment_method', 'items_count'
            )
        }),
        ('Additional Information', {
            'fields': ('notes',),
            'classes': ('collapse',)
        }),
    )


class ReturnItemInline(admin.TabularInline):
    model = ReturnItem
    extra = 0
    readonly_fields = ('order_item', 'product_name', 'quantity', 'refund_amount')


@admin.register(Return)
class ReturnAdmin(admin.ModelAdmin):
    list_display = ('return_number', 'order', 'customer_name', 'reason', 'status', 'refund_amount', 'created_at')
    list_filter = ('status', 'reason')
    search_fields = ('return_number', 'order__order_number', 'customer_email')
    readonly_fields = ('return_number', 'status', 'refund_amount', 'refund_processed_at', 'processed_by')
    inlines = [ReturnItemInline]


class ReviewModerationLogInline(admin.TabularInline):
    model = ReviewModerationLog
    extra = 0
    readonly_fields = ('moderator', 'action', 'previous_status', 'new_status', 'reason', 'created_at')


@admin.register(Review)
class ReviewAdmin(admin.ModelAdmin):
    list_display = ('product', 'user', 'rating', 'status', 'is_verified_purchase', 'created_at')
    list_filter = ('status', 'rating', 'is_verified_purchase')
    search_fields = ('product__name', 'title', 'content')
    inlines = [ReviewModerationLogInline]
