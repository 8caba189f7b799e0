from fastapi import APIRouter, Depends, Request, status

from blocktix.config import Settings, get_settings
from blocktix.database import get_store
from blocktix.routers.auth import limiter
from blocktix.schemas import ContactCreate, SignupResponse, UserCreate
from blocktix.services.auth import AuthService, get_current_claims
from blocktix.stores.base import TicketStore

router = APIRouter(tags=["accounts"])


@router.post("/signup", response_model=SignupResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit("5/minute")
async def signup(
    request: Request,
    payload: UserCreate,
    store: TicketStore = Depends(get_store),
    settings: Settings = Depends(get_settings)
):
    return AuthService.signup(store, settings, payload)


@router.get("/profile")
async def profile(claims: dict = Depends(get_current_claims)):
    return {"user": claims}


@router.post("/contact", status_code=status.HTTP_201_CREATED)
@limiter.limit("5/minute")
async def contact(
    request: Request,
    payload: ContactCreate,
    store: TicketStore = Depends(get_store)
):
    AuthService.submit_contact(store, payload)
    return {"message": "Form submitted successfully"}
