"""Outfit styles, per-style slot state machine and the session snapshot."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Dict, Mapping, Optional


class Style(str, Enum):
    """The three fixed outfit styles a look is generated for."""

    CASUAL = "casual"
    BUSINESS = "business"
    NIGHT_OUT = "night_out"

    @property
    def label(self) -> str:
        return _STYLE_LABELS[self]

    @property
    def display_title(self) -> str:
        return _STYLE_TITLES[self]


_STYLE_LABELS = {
    Style.CASUAL: "Casual",
    Style.BUSINESS: "Business",
    Style.NIGHT_OUT: "Night Out",
}

_STYLE_TITLES = {
    Style.CASUAL: "THE_CHILL_FIT",
    Style.BUSINESS: "CEO_ENERGY",
    Style.NIGHT_OUT: "MAIN_CHARACTER",
}


class SlotStatus(str, Enum):
    IDLE = "idle"
    GENERATING = "generating"
    SUCCESS = "success"
    ERROR = "error"


class SlotTransitionError(RuntimeError):
    """Raised when a slot is asked to resolve without passing through generating."""


@dataclass(frozen=True, slots=True)
class UploadedImage:
    """The current source image, replaced wholesale on every upload."""

    filename: Optional[str]
    content_type: Optional[str]
    preview_uri: str
    encoded_payload: str


@dataclass(frozen=True, slots=True)
class OutfitSlot:
    """Generation/edit progress and result for one style."""

    style: Style
    image_uri: Optional[str] = None
    status: SlotStatus = SlotStatus.IDLE
    error_message: Optional[str] = None

    @classmethod
    def empty(cls, style: Style) -> "OutfitSlot":
        return cls(style=style)

    def start(self) -> "OutfitSlot":
        """Enter generating, keeping the current image and clearing any error."""
        return replace(self, status=SlotStatus.GENERATING, error_message=None)

    def succeed(self, image_uri: str) -> "OutfitSlot":
        if self.status is not SlotStatus.GENERATING:
            raise SlotTransitionError(
                f"{self.style.value}: cannot succeed from {self.status.value}"
            )
        if not image_uri:
            raise ValueError("A successful slot needs an image URI")
        return replace(
            self, image_uri=image_uri, status=SlotStatus.SUCCESS, error_message=None
        )

    def fail(self, message: str) -> "OutfitSlot":
        if self.status is not SlotStatus.GENERATING:
            raise SlotTransitionError(
                f"{self.style.value}: cannot fail from {self.status.value}"
            )
        return replace(self, status=SlotStatus.ERROR, error_message=message)

    @property
    def is_generating(self) -> bool:
        return self.status is SlotStatus.GENERATING


def _empty_slots() -> Mapping[Style, OutfitSlot]:
    return MappingProxyType({style: OutfitSlot.empty(style) for style in Style})


@dataclass(frozen=True, slots=True)
class StylistState:
    """
    Immutable snapshot of the session.

    ``slots`` always holds exactly one entry per Style. Updates produce a new
    snapshot through ``with_slot`` / ``with_slots``; published snapshots are
    never mutated.
    """

    version: int = 0
    image: Optional[UploadedImage] = None
    slots: Mapping[Style, OutfitSlot] = field(default_factory=_empty_slots)

    def slot(self, style: Style) -> OutfitSlot:
        return self.slots[style]

    def with_slots(self, updates: Mapping[Style, OutfitSlot]) -> "StylistState":
        merged: Dict[Style, OutfitSlot] = dict(self.slots)
        for style, slot in updates.items():
            if slot.style is not style:
                raise ValueError(f"Slot for {slot.style.value} stored under {style.value}")
            merged[style] = slot
        return replace(self, slots=MappingProxyType(merged))

    def with_slot(self, slot: OutfitSlot) -> "StylistState":
        return self.with_slots({slot.style: slot})

    def with_image(self, image: UploadedImage) -> "StylistState":
        """New source image: bump the version and reset every slot to idle."""
        return StylistState(version=self.version + 1, image=image, slots=_empty_slots())

    @property
    def is_generating(self) -> bool:
        return any(slot.is_generating for slot in self.slots.values())


__all__ = [
    "Style",
    "SlotStatus",
    "SlotTransitionError",
    "UploadedImage",
    "OutfitSlot",
    "StylistState",
]
