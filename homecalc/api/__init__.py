"""
API routes for the calculator.
"""

from fastapi import APIRouter

from homecalc.api import calculations

router = APIRouter()

router.include_router(calculations.router, prefix="/calculate", tags=["calculations"])
