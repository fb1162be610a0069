"""Router module exports."""
from src.api.routers import demands, production_orders, reports, skus

__all__ = ["demands", "production_orders", "reports", "skus"]
