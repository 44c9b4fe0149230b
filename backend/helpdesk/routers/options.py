"""Option lists used by client forms."""
from fastapi import APIRouter

from helpdesk.catalog import INCIDENT_CATEGORIES, ORDER_CATEGORIES, SERVICES
from helpdesk.models.request import Priority, RequestType
from helpdesk.schemas.request import OptionsOut

router = APIRouter()


@router.get("/", response_model=OptionsOut)
def get_options():
    return OptionsOut(
        services=list(SERVICES),
        types=[t.value for t in RequestType],
        priorities=[p.value for p in Priority],
        incident_categories=list(INCIDENT_CATEGORIES),
        order_categories=list(ORDER_CATEGORIES),
    )
