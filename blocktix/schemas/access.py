from datetime import datetime
from typing import Optional

from blocktix.models.access_list import AccessListKind
from blocktix.schemas.base import CamelModel


class AccessListCreate(CamelModel):
    wallets: list[str] = []


class AccessList(CamelModel):
    id: Optional[int] = None
    kind: AccessListKind
    wallets: list[str] = []
    created_at: Optional[datetime] = None
