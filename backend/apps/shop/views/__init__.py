from .admin import AnalyticsView, CustomerAdminViewSet, DashboardView, ProductAdminViewSet
from .cart import CartItemDetailView, CartItemsView, CartQuoteView, CartView
from .catalog import CategoryViewSet, DesignViewSet, ProductViewSet
from .discounts import DiscountAdminViewSet, DiscountValidateView
from .orders import CheckoutView, OrderViewSet
from .returns import ReturnViewSet
from .reviews import ReviewModerationViewSet, ReviewViewSet
from .wishlist import WishlistItemView, WishlistView
