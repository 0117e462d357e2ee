"""API v1 routes."""

from fastapi import APIRouter

from app.api.v1 import auth, employees, floors, health, orders, rooms, users, visitors, vouchers

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
# auth first so /users/me and /users/login win over /users/{user_id}
router.include_router(auth.router, prefix="/users", tags=["auth"])
router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(rooms.router, prefix="/rooms", tags=["rooms"])
router.include_router(floors.router, prefix="/floors", tags=["floors"])
router.include_router(employees.router, prefix="/employees", tags=["employees"])
router.include_router(visitors.router, prefix="/visitors", tags=["visitors"])
router.include_router(vouchers.router, prefix="/vouchers", tags=["vouchers"])
router.include_router(orders.router, prefix="/orders", tags=["orders"])
