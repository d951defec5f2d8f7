# apps/shop/urls.py

"""
URL configuration for the storefront API
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from . import views

app_name = 'shop'

router = DefaultRouter()
router.register('products', views.ProductViewSet, basename='products')
router.register('categories', views.CategoryViewSet, basename='categories')
router.register('designs', views.DesignViewSet, basename='designs')
router.register('orders', views.OrderViewSet, basename='orders')
router.register('returns', views.ReturnViewSet, basename='returns')
router.register('reviews', views.ReviewViewSet, basename='reviews')

# Back office
router.register('admin/products', views.ProductAdminViewSet, basename='admin-products')
router.register('admin/discounts', views.DiscountAdminViewSet, basename='admin-discounts')
router.register('admin/reviews', views.ReviewModerationViewSet, basename='admin-reviews')
router.register('admin/customers', views.CustomerAdminViewSet, basename='admin-customers')

urlpatterns = [
    # Cart and checkout
    path('cart/', views.CartView.as_view(), name='cart'),
    path('cart/items/', views.CartItemsView.as_view(), name='cart-items'),
    path('cart/items/<path:line_id>/', views.CartItemDetailView.as_view(), name='cart-item-detail'),
    path('cart/quote/', views.CartQuoteView.as_view(), name='cart-quote'),
    path('checkout/', views.CheckoutView.as_view(), name='checkout'),

    # Wishlist
    path('wishlist/', views.WishlistView.as_view(), name='wishlist'),
    path('wishlist/<uuid:product_id>/', views.WishlistItemView.as_view(), name='wishlist-item'),

    path('discounts/validate/', views.DiscountValidateView.as_view(), name='discount-validate'),

    # Back office
    path('admin/dashboard/', views.DashboardView.as_view(), name='admin-dashboard'),
    path('admin/analytics/<slug:report>/', views.AnalyticsView.as_view(), name='admin-analytics'),

    path('', include(router.urls)),
]
