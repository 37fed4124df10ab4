from fastapi import APIRouter

from api.api_v1.endpoints import admin, auth, books, healthz, withdrawals

api_router = APIRouter()

# Group routes by adding tags parameter
api_router.include_router(auth.router, prefix="/auth", tags=["Auth"])
api_router.include_router(books.router, prefix="/books", tags=["Books"])
api_router.include_router(withdrawals.router, tags=["Wallet"])
api_router.include_router(admin.router, prefix="/admin", tags=["Admin"])
api_router.include_router(healthz.router, prefix="/health", tags=["Others"])
