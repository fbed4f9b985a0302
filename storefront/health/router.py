from fastapi import APIRouter, Request
from storefront.health.service import payments_health_info

router = APIRouter(prefix="/health", tags=["Health"])

@router.get("")
def health_root():
    return {"ok": True}

@router.get("/payments")
def health_payments(request: Request):
    return payments_health_info(request)
