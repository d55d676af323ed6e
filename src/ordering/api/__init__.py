from ordering.api.routes import cart_router, deal_router, order_router

__all__ = ["cart_router", "deal_router", "order_router"]
