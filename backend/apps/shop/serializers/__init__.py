from .cart import (
    CartItemInputSerializer, CartQuantitySerializer, QuoteSerializer, TotalsSerializer,
    cart_payload,
)
from .catalog import (
    CategorySerializer, DesignSerializer, ImageUploadSerializer, ProductImageSerializer,
    ProductSerializer, ProductUpdateSerializer, StockUpdateSerializer,
)
from .customers import CustomerDetailSerializer, CustomerNotesSerializer, CustomerSummarySerializer
from .discounts import DiscountSerializer, DiscountValidateSerializer
from .orders import (
    AdminOrderSerializer, CheckoutSerializer, OrderSerializer, OrderStatusUpdateSerializer,
)
from .returns import (
    RefundSerializer, ReturnCreateSerializer, ReturnSerializer, ReturnStatusUpdateSerializer,
)
from .reviews import (
    ModerationSerializer, ReviewCreateSerializer, ReviewSerializer, ReviewUpdateSerializer,
)
