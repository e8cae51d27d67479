"""Test doubles and utilities shared across the virtual stylist tests."""

from __future__ import annotations

import asyncio
from io import BytesIO
from typing import Dict, List, Tuple

from PIL import Image

from virtual_stylist.core.gemini import GenerationError
from virtual_stylist.core.outfits import Style


def make_image_bytes(fmt: str = "PNG", size: Tuple[int, int] = (8, 8)) -> bytes:
    buffer = BytesIO()
    mode = "RGBA" if fmt == "PNG" else "RGB"
    Image.new(mode, size, color="red").save(buffer, format=fmt)
    return buffer.getvalue()


async def settle(rounds: int = 20) -> None:
    """Let pending callbacks and tasks on the event loop run."""
    for _ in range(rounds):
        await asyncio.sleep(0)


class ControlledGenerator:
    """Image generator whose calls stay pending until the test resolves them."""

    def __init__(self) -> None:
        self.generate_calls: List[Tuple[str, Style]] = []
        self.edit_calls: List[Tuple[str, str]] = []
        self.pending: Dict[Style, asyncio.Future] = {}
        self.pending_edits: List[asyncio.Future] = []

    async def generate(self, image_payload: str, style: Style) -> str:
        self.generate_calls.append((image_payload, style))
        future = asyncio.get_running_loop().create_future()
        self.pending[style] = future
        return await future

    async def edit(self, image_uri: str, instruction: str) -> str:
        self.edit_calls.append((image_uri, instruction))
        future = asyncio.get_running_loop().create_future()
        self.pending_edits.append(future)
        return await future


class InstantGenerator:
    """Image generator that answers immediately with deterministic images."""

    def __init__(self, failing: Tuple[Style, ...] = ()) -> None:
        self.failing = failing
        self.generate_calls: List[Tuple[str, Style]] = []
        self.edit_calls: List[Tuple[str, str]] = []

    async def generate(self, image_payload: str, style: Style) -> str:
        self.generate_calls.append((image_payload, style))
        if style in self.failing:
            raise GenerationError("No image generated.")
        return f"data:image/jpeg;base64,{style.value.upper()}"

    async def edit(self, image_uri: str, instruction: str) -> str:
        self.edit_calls.append((image_uri, instruction))
        return f"{image_uri}-EDITED"
