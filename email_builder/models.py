"""
Tables de persistance — blobs JSON opaques (le schéma vit côté Pydantic).
SQLAlchemy (SQLite)
"""
from datetime import datetime

import sqlalchemy as sa
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class DocumentDB(Base):
    """Document courant (une ligne par clé, "current" par défaut)."""
    __tablename__ = "documents"
    key:        Mapped[str]      = mapped_column(sa.String, primary_key=True, default="current")
    data:       Mapped[str]      = mapped_column(sa.Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(sa.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class FavoriteDB(Base):
    __tablename__ = "favorites"
    id:         Mapped[str]      = mapped_column(sa.String, primary_key=True)
    name:       Mapped[str]      = mapped_column(sa.String, nullable=False)
    block_type: Mapped[str]      = mapped_column(sa.String, nullable=False)
    data:       Mapped[str]      = mapped_column(sa.Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(sa.DateTime, default=datetime.utcnow)


class TemplateDB(Base):
    __tablename__ = "templates"
    id:         Mapped[str]      = mapped_column(sa.String, primary_key=True)
    name:       Mapped[str]      = mapped_column(sa.String, nullable=False)
    data:       Mapped[str]      = mapped_column(sa.Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(sa.DateTime, default=datetime.utcnow)


class PaletteDB(Base):
    """Ordre personnalisé de la palette (liste JSON de kinds)."""
    __tablename__ = "palette"
    key:   Mapped[str] = mapped_column(sa.String, primary_key=True, default="order")
    kinds: Mapped[str] = mapped_column(sa.Text, nullable=False, default="[]")
