from app.routers.dashboard import router as dashboard_router
from app.routers.health import router as health_router
from app.routers.medicines import router as medicines_router
from app.routers.prescriptions import router as prescriptions_router
from app.routers.sales import router as sales_router
from app.routers.suppliers import router as suppliers_router
from app.routers.users import router as users_router

__all__ = [
    "dashboard_router",
    "health_router",
    "medicines_router",
    "prescriptions_router",
    "sales_router",
    "suppliers_router",
    "users_router",
]
