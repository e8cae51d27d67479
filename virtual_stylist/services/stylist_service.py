"""Orchestration of uploads, parallel outfit generation and per-style edits."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Optional, Protocol, Tuple

from virtual_stylist.config import logger
from virtual_stylist.core.encoder import ImageReadError, encode_image
from virtual_stylist.core.gemini import GenerationClientError
from virtual_stylist.core.outfits import OutfitSlot, Style, StylistState

GENERATE_ERROR_MESSAGE = "Could not generate outfit"
EDIT_ERROR_MESSAGE = "Failed to edit image"


def _log(level: int, message: str, **context: Any) -> None:
    """Helper to emit structured logs with contextual metadata."""
    logger.log(level, "%s | context=%s", message, context)


class ImageGenerator(Protocol):
    async def generate(self, image_payload: str, style: Style) -> str: ...

    async def edit(self, image_uri: str, instruction: str) -> str: ...


class NoImageError(RuntimeError):
    """Raised when generation is requested before any image was uploaded."""


@dataclass(slots=True, frozen=True)
class GenerationBatch:
    """Requests issued by one generate-all, tagged with the image version."""

    version: int
    image_payload: str
    styles: Tuple[Style, ...]


@dataclass(slots=True, frozen=True)
class EditRequest:
    """A single-style edit, tagged with the image version."""

    version: int
    style: Style
    image_uri: str
    instruction: str


class StylistOrchestrator:
    """
    Owns the uploaded image and the three outfit slots.

    Every change is committed as a new immutable StylistState; readers only ever
    see committed snapshots. Results of requests issued for an earlier upload
    are dropped when they resolve.
    """

    def __init__(self, client: ImageGenerator) -> None:
        self._client = client
        self._state = StylistState()

    def snapshot(self) -> StylistState:
        return self._state

    # -------------------------
    # Upload
    # -------------------------
    def upload(
        self,
        data: bytes,
        filename: Optional[str] = None,
        content_type: Optional[str] = None,
    ) -> StylistState:
        """Encode a new source image and reset every slot to idle."""
        try:
            image = encode_image(data, filename=filename, content_type=content_type)
        except ImageReadError as exc:
            _log(logging.ERROR, "image_read_failed", filename=filename, error=str(exc))
            raise

        self._state = self._state.with_image(image)
        _log(
            logging.INFO,
            "image_uploaded",
            filename=filename,
            version=self._state.version,
        )
        return self._state

    # -------------------------
    # Generate all styles
    # -------------------------
    def begin_generate_all(self) -> GenerationBatch:
        """Mark every slot as generating in a single commit and return the batch."""
        state = self._state
        if state.image is None:
            raise NoImageError("Upload an image before generating outfits")

        self._state = state.with_slots(
            {style: slot.start() for style, slot in state.slots.items()}
        )
        batch = GenerationBatch(
            version=state.version,
            image_payload=state.image.encoded_payload,
            styles=tuple(Style),
        )
        _log(logging.INFO, "generation_batch_started", version=batch.version)
        return batch

    async def run_generation(self, batch: GenerationBatch) -> StylistState:
        """Run one request per style concurrently, merging each as it completes."""
        tasks = [
            asyncio.create_task(self._generate_one(batch, style))
            for style in batch.styles
        ]
        for next_done in asyncio.as_completed(tasks):
            style, image_uri, error = await next_done
            self._merge_generation(batch, style, image_uri, error)

        _log(logging.INFO, "generation_batch_finished", version=batch.version)
        return self._state

    async def generate_all(self) -> StylistState:
        return await self.run_generation(self.begin_generate_all())

    async def _generate_one(
        self, batch: GenerationBatch, style: Style
    ) -> Tuple[Style, Optional[str], Optional[Exception]]:
        try:
            image_uri = await self._client.generate(batch.image_payload, style)
        except GenerationClientError as exc:
            return style, None, exc
        except Exception as exc:
            logger.error(f"Unexpected generation failure ({style.value})", exc_info=True)
            return style, None, exc
        return style, image_uri, None

    def _merge_generation(
        self,
        batch: GenerationBatch,
        style: Style,
        image_uri: Optional[str],
        error: Optional[Exception],
    ) -> None:
        if self._is_stale(batch.version):
            _log(
                logging.DEBUG,
                "stale_generation_dropped",
                style=style.value,
                request_version=batch.version,
                current_version=self._state.version,
            )
            return

        slot = self._pending_slot(style)
        if error is None and image_uri:
            self._state = self._state.with_slot(slot.succeed(image_uri))
            _log(logging.INFO, "generation_complete", style=style.value)
        else:
            self._state = self._state.with_slot(slot.fail(GENERATE_ERROR_MESSAGE))
            _log(
                logging.ERROR,
                "generation_error",
                style=style.value,
                error=str(error) if error else "empty result",
            )

    # -------------------------
    # Edit one style
    # -------------------------
    def begin_edit(self, style: Style, instruction: str) -> Optional[EditRequest]:
        """
        Mark one slot as generating and return the edit request.

        Returns None without touching state when the instruction is blank or the
        slot has no image yet.
        """
        if not instruction or not instruction.strip():
            _log(logging.DEBUG, "edit_skipped_blank_instruction", style=style.value)
            return None

        slot = self._state.slot(style)
        if not slot.image_uri:
            _log(logging.DEBUG, "edit_skipped_no_image", style=style.value)
            return None

        self._state = self._state.with_slot(slot.start())
        request = EditRequest(
            version=self._state.version,
            style=style,
            image_uri=slot.image_uri,
            instruction=instruction,
        )
        _log(logging.INFO, "edit_started", style=style.value, version=request.version)
        return request

    async def run_edit(self, request: EditRequest) -> StylistState:
        error: Optional[Exception] = None
        image_uri: Optional[str] = None
        try:
            image_uri = await self._client.edit(request.image_uri, request.instruction)
        except GenerationClientError as exc:
            error = exc
        except Exception as exc:
            logger.error(f"Unexpected edit failure ({request.style.value})", exc_info=True)
            error = exc

        if self._is_stale(request.version):
            _log(
                logging.DEBUG,
                "stale_edit_dropped",
                style=request.style.value,
                request_version=request.version,
                current_version=self._state.version,
            )
            return self._state

        slot = self._pending_slot(request.style)
        if error is None and image_uri:
            self._state = self._state.with_slot(slot.succeed(image_uri))
            _log(logging.INFO, "edit_complete", style=request.style.value)
        else:
            self._state = self._state.with_slot(slot.fail(EDIT_ERROR_MESSAGE))
            _log(
                logging.ERROR,
                "edit_error",
                style=request.style.value,
                error=str(error) if error else "empty result",
            )
        return self._state

    async def edit_outfit(self, style: Style, instruction: str) -> StylistState:
        request = self.begin_edit(style, instruction)
        if request is None:
            return self._state
        return await self.run_edit(request)

    def _is_stale(self, version: int) -> bool:
        return version != self._state.version

    def _pending_slot(self, style: Style) -> OutfitSlot:
        """Slot a result is merged into; last write wins over an earlier resolution."""
        slot = self._state.slot(style)
        if not slot.is_generating:
            _log(logging.DEBUG, "late_result_overwrites", style=style.value)
            slot = slot.start()
        return slot


__all__ = [
    "StylistOrchestrator",
    "GenerationBatch",
    "EditRequest",
    "ImageGenerator",
    "NoImageError",
    "GENERATE_ERROR_MESSAGE",
    "EDIT_ERROR_MESSAGE",
]
