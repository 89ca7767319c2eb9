"""Data Transfer Objects for catalog entries."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from app.crypto_alerts.domain.entities.entry import Entry


class EntryDTO(BaseModel):
    """Catalog entry for API responses."""

    model_config = ConfigDict(
        json_encoders={Decimal: lambda v: float(v)},
        from_attributes=True,
    )

    symbol: str = Field(description="Ticker symbol (e.g., 'BTC')")
    name: str = Field(description="Human-readable asset name")
    url: str = Field(description="Reference page for the asset")
    logo: str = Field(description="Logo image URL")
    previous_quote: Optional[Decimal] = Field(default=None, description="Quote before the latest one")
    current_quote: Optional[Decimal] = Field(default=None, description="Latest quote")

    @classmethod
    def from_entry(cls, entry: Entry) -> "EntryDTO":
        return cls.model_validate(entry)


class EntryListDTO(BaseModel):
    """Catalog listing for API responses."""

    entries: list[EntryDTO] = Field(default_factory=list, description="Watchable entries")
    total: int = Field(description="Number of entries")
    stale: bool = Field(
        default=False,
        description="True when the source failed and the last good catalog is served",
    )
    next_refresh_at: Optional[datetime] = Field(
        default=None,
        description="When the catalog will be fetched again (UTC)",
    )
