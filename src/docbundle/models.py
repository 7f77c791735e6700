"""
docbundle.models

Catalog data model plus the small value types passed between the resolver,
the merger and the download panel.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class FileDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = ""
    url: str


class DocumentCategory(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    files: List[FileDescriptor] = Field(default_factory=list)


class Catalog(BaseModel):
    model_config = ConfigDict(frozen=True)

    categories: List[DocumentCategory] = Field(default_factory=list)


class ProductCategory(str, Enum):
    """Product tags with a dedicated selection rule. Unknown tags use the default rule."""

    CHARGING_CABLES = "chargingCables"
    CHARGING_STATIONS = "chargingStations"
    DC_CHARGING_STATION = "dcChargingStation"
    DC_FAST_CHARGING_STATION = "dcFastChargingStation"
    PORTABLE_EV_CHARGING = "portableEVCharging"


class MergeRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    files: List[FileDescriptor] = Field(default_factory=list)
    output_name: str


@dataclass(frozen=True)
class ResolvedFiles:
    data_sheet_files: List[FileDescriptor] = field(default_factory=list)
    conformity_files: List[FileDescriptor] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.data_sheet_files and not self.conformity_files


OutcomeKind = Literal["empty", "single", "merged", "fallback", "busy"]


@dataclass(frozen=True)
class MergeOutcome:
    kind: OutcomeKind
    filename: Optional[str] = None
    pages: int = 0
    skipped: List[str] = field(default_factory=list)
    url: Optional[str] = None

    @property
    def delivered(self) -> bool:
        return self.kind in ("single", "merged")
