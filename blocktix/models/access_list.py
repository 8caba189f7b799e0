from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Enum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from blocktix.database import Base
import enum


class AccessListKind(str, enum.Enum):
    WHITELIST = "whitelist"
    BLACKLIST = "blacklist"


class AccessList(Base):
    __tablename__ = "access_lists"

    id = Column(Integer, primary_key=True, index=True)
    kind = Column(Enum(AccessListKind), nullable=False, index=True)
    created_at = Column(DateTime, server_default=func.now())

    entries = relationship(
        "AccessListEntry",
        back_populates="access_list",
        order_by="AccessListEntry.id",
        cascade="all, delete-orphan"
    )


class AccessListEntry(Base):
    __tablename__ = "access_list_entries"

    id = Column(Integer, primary_key=True, index=True)
    list_id = Column(Integer, ForeignKey("access_lists.id"), nullable=False)
    kind = Column(Enum(AccessListKind), nullable=False)
    wallet = Column(String(320), nullable=False)
    wallet_key = Column(String(320), nullable=False, index=True)

    access_list = relationship("AccessList", back_populates="entries")
