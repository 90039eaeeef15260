"""
API routes for the financial calculators.
"""

from fastapi import APIRouter

from fincalc.api import irr, loans, social_security, taxes

router = APIRouter()

# Include sub-routers
router.include_router(irr.router, prefix="/calculate", tags=["irr"])
router.include_router(loans.router, prefix="/calculate", tags=["loans"])
router.include_router(taxes.router, prefix="/calculate", tags=["taxes"])
router.include_router(
    social_security.router,
    prefix="/calculate/social-security",
    tags=["social-security"],
)
