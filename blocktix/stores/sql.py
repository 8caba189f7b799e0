"""SQLAlchemy implementation of the TicketStore."""

import logging
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Iterator, Optional

from sqlalchemy import case, func
from sqlalchemy.orm import Session, sessionmaker

from blocktix import models
from blocktix.models.access_list import AccessListKind
from blocktix.models.event import EventStatus
from blocktix.models.ledger import LedgerEntryType
from blocktix.schemas import (
    AccessList, CategoryBreakdown, ContactSubmission, Event, LedgerEntry, ResaleRules, User
)
from blocktix.stores.base import TicketStore

logger = logging.getLogger(__name__)


def _key(wallet: str) -> str:
    return wallet.strip().lower()


def _now() -> datetime:
    return datetime.now(timezone.utc)


class SqlTicketStore(TicketStore):
    """Relational store. Each call runs in its own session."""

    def __init__(self, session_factory: sessionmaker) -> None:
        self._session_factory = session_factory

    @contextmanager
    def _session(self) -> Iterator[Session]:
        db = self._session_factory()
        try:
            yield db
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def list_events(self, status: Optional[EventStatus] = None) -> list[Event]:
        with self._session() as db:
            query = db.query(models.Event)
            if status is not None:
                query = query.filter(models.Event.status == status)
            return [Event.model_validate(e) for e in query.order_by(models.Event.created_at.asc()).all()]

    def get_event(self, event_id: str) -> Optional[Event]:
        with self._session() as db:
            event = db.query(models.Event).filter(models.Event.id == event_id).first()
            return Event.model_validate(event) if event else None

    def find_event(self, title: str, starts_at: Optional[datetime]) -> Optional[Event]:
        with self._session() as db:
            event = db.query(models.Event).filter(
                models.Event.title == title,
                models.Event.starts_at == starts_at
            ).first()
            return Event.model_validate(event) if event else None

    def save_event(self, event: Event) -> Event:
        with self._session() as db:
            row = None
            if event.id:
                row = db.query(models.Event).filter(models.Event.id == event.id).first()
            if row is None:
                row = models.Event(id=event.id or uuid.uuid4().hex)
                db.add(row)

            row.title = event.title
            row.description = event.description
            row.starts_at = event.starts_at
            row.location = event.location
            row.image_url = event.image_url
            row.category = event.category
            row.is_featured = event.is_featured
            row.status = event.status
            row.price = event.price
            row.total_tickets = event.total_tickets
            row.available_tickets = event.available_tickets
            row.created_at = event.created_at or _now()
            row.updated_at = event.updated_at or _now()
            row.published_at = event.published_at
            row.categories = [
                models.TicketCategory(
                    position=position,
                    name=c.name,
                    price=c.price,
                    total=c.total,
                    available=c.available
                )
                for position, c in enumerate(event.categories)
            ]

            db.commit()
            db.refresh(row)
            return Event.model_validate(row)

    def delete_event(self, event_id: str) -> None:
        with self._session() as db:
            event = db.query(models.Event).filter(models.Event.id == event_id).first()
            if event:
                db.delete(event)
            db.query(models.ResaleRule).filter(models.ResaleRule.event_id == event_id).delete()
            db.commit()

    def reserve_tickets(self, event_id: str, quantity: int, category_name: Optional[str] = None) -> bool:
        # Conditional UPDATEs: the WHERE clause re-checks stock on the server,
        # so two buyers racing for the last tickets cannot both succeed.
        with self._session() as db:
            if category_name is not None:
                updated = db.query(models.TicketCategory).filter(
                    models.TicketCategory.event_id == event_id,
                    func.lower(models.TicketCategory.name) == category_name.strip().lower(),
                    models.TicketCategory.available >= quantity
                ).update(
                    {models.TicketCategory.available: models.TicketCategory.available - quantity},
                    synchronize_session=False
                )
                if not updated:
                    db.rollback()
                    return False
                db.query(models.Event).filter(models.Event.id == event_id).update(
                    {
                        models.Event.available_tickets: models.Event.available_tickets - quantity,
                        models.Event.updated_at: _now()
                    },
                    synchronize_session=False
                )
            else:
                updated = db.query(models.Event).filter(
                    models.Event.id == event_id,
                    models.Event.available_tickets >= quantity
                ).update(
                    {
                        models.Event.available_tickets: models.Event.available_tickets - quantity,
                        models.Event.updated_at: _now()
                    },
                    synchronize_session=False
                )
                if not updated:
                    db.rollback()
                    return False

            db.commit()
            return True

    def get_rules(self, event_id: str) -> Optional[ResaleRules]:
        with self._session() as db:
            rules = db.query(models.ResaleRule).filter(models.ResaleRule.event_id == event_id).first()
            return ResaleRules.model_validate(rules) if rules else None

    def save_rules(self, rules: ResaleRules) -> ResaleRules:
        with self._session() as db:
            row = db.query(models.ResaleRule).filter(models.ResaleRule.event_id == rules.event_id).first()
            if row is None:
                row = models.ResaleRule(event_id=rules.event_id)
                db.add(row)
            row.allow_resale = rules.allow_resale
            row.allow_transfer = rules.allow_transfer
            row.max_resale_price_multiplier = rules.max_resale_price_multiplier
            row.max_tickets_per_wallet = rules.max_tickets_per_wallet
            row.single_use = rules.single_use
            row.updated_at = rules.updated_at or _now()
            db.commit()
            db.refresh(row)
            return ResaleRules.model_validate(row)

    def append_entry(self, entry: LedgerEntry) -> LedgerEntry:
        with self._session() as db:
            row = models.LedgerEntry(
                type=entry.type,
                event_id=entry.event_id,
                from_wallet=entry.from_wallet,
                to_wallet=entry.to_wallet,
                to_wallet_key=_key(entry.to_wallet) if entry.to_wallet else None,
                amount=entry.amount,
                quantity=entry.quantity,
                category_name=entry.category_name,
                timestamp=entry.timestamp or _now(),
                order_id=entry.order_id
            )
            db.add(row)
            db.commit()
            db.refresh(row)
            return LedgerEntry.model_validate(row)

    def purchased_quantity(self, event_id: str, wallet: str) -> int:
        with self._session() as db:
            total = db.query(func.sum(models.LedgerEntry.quantity)).filter(
                models.LedgerEntry.type == LedgerEntryType.PURCHASE,
                models.LedgerEntry.to_wallet_key == _key(wallet),
                models.LedgerEntry.event_id == event_id
            ).scalar()
            return int(total or 0)

    def list_purchases(self, wallet: str) -> list[LedgerEntry]:
        with self._session() as db:
            rows = db.query(models.LedgerEntry).filter(
                models.LedgerEntry.type == LedgerEntryType.PURCHASE,
                models.LedgerEntry.to_wallet_key == _key(wallet)
            ).order_by(models.LedgerEntry.timestamp.desc(), models.LedgerEntry.id.desc()).all()
            return [LedgerEntry.model_validate(r) for r in rows]

    def get_entry_by_order_id(self, order_id: str) -> Optional[LedgerEntry]:
        with self._session() as db:
            row = db.query(models.LedgerEntry).filter(models.LedgerEntry.order_id == order_id).first()
            return LedgerEntry.model_validate(row) if row else None

    def list_entries(self, limit: int) -> list[LedgerEntry]:
        with self._session() as db:
            rows = db.query(models.LedgerEntry).order_by(
                models.LedgerEntry.timestamp.desc(), models.LedgerEntry.id.desc()
            ).limit(limit).all()
            return [LedgerEntry.model_validate(r) for r in rows]

    def category_breakdown(self) -> list[CategoryBreakdown]:
        entry = models.LedgerEntry
        with self._session() as db:
            rows = db.query(
                entry.event_id,
                entry.category_name,
                func.sum(case(
                    (entry.type == LedgerEntryType.PURCHASE, func.coalesce(entry.quantity, 1)),
                    else_=0
                )),
                func.sum(case((entry.type == LedgerEntryType.RESELL, 1), else_=0)),
                func.sum(func.coalesce(entry.amount, 0))
            ).group_by(entry.event_id, entry.category_name).order_by(
                entry.event_id, entry.category_name
            ).all()

            return [
                CategoryBreakdown(
                    event_id=event_id,
                    category_name=category_name,
                    purchases=int(purchases or 0),
                    resales=int(resales or 0),
                    total_amount=float(total_amount or 0)
                )
                for event_id, category_name, purchases, resales, total_amount in rows
            ]

    def add_access_list(self, kind: AccessListKind, wallets: list[str]) -> AccessList:
        with self._session() as db:
            row = models.AccessList(kind=kind, created_at=_now())
            row.entries = [
                models.AccessListEntry(kind=kind, wallet=w, wallet_key=_key(w))
                for w in wallets
            ]
            db.add(row)
            db.commit()
            db.refresh(row)
            return AccessList(
                id=row.id,
                kind=row.kind,
                wallets=[e.wallet for e in row.entries],
                created_at=row.created_at
            )

    def has_access_list(self, kind: AccessListKind) -> bool:
        with self._session() as db:
            return db.query(models.AccessList.id).filter(models.AccessList.kind == kind).first() is not None

    def is_listed(self, kind: AccessListKind, wallet: str) -> bool:
        with self._session() as db:
            return db.query(models.AccessListEntry.id).filter(
                models.AccessListEntry.kind == kind,
                models.AccessListEntry.wallet_key == _key(wallet)
            ).first() is not None

    def create_user(self, name: str, email: str, hashed_password: str) -> User:
        with self._session() as db:
            row = models.User(
                name=name,
                email=email,
                hashed_password=hashed_password,
                created_at=_now()
            )
            db.add(row)
            db.commit()
            db.refresh(row)
            return User.model_validate(row)

    def get_user_by_email(self, email: str) -> Optional[User]:
        with self._session() as db:
            row = db.query(models.User).filter(func.lower(models.User.email) == _key(email)).first()
            return User.model_validate(row) if row else None

    def add_contact_submission(self, submission: ContactSubmission) -> ContactSubmission:
        with self._session() as db:
            row = models.ContactSubmission(
                name=submission.name,
                email=submission.email,
                subject=submission.subject,
                message=submission.message,
                submitted_at=submission.submitted_at or _now()
            )
            db.add(row)
            db.commit()
            db.refresh(row)
            return ContactSubmission.model_validate(row)
