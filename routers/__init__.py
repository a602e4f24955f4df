from .rooms import router as rooms_router
from .tenants import router as tenants_router
from .payments import router as payments_router
from .rent import router as rent_router
from .meters import router as meters_router
from .complaints import router as complaints_router
from .dashboard import router as dashboard_router

all_routers = [
     rooms_router,
     tenants_router,
     payments_router,
     rent_router,
     meters_router,
     complaints_router,
     dashboard_router,
]

__all__ = ["all_routers"]
