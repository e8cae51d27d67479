"""Shared fixtures for the virtual stylist tests."""

from __future__ import annotations

import os

# Keep test runs from writing a log file into the working tree
os.environ.setdefault("LOG_FILE", "")

import pytest

from helpers import ControlledGenerator, InstantGenerator, make_image_bytes


@pytest.fixture
def png_bytes() -> bytes:
    return make_image_bytes("PNG")


@pytest.fixture
def jpeg_bytes() -> bytes:
    return make_image_bytes("JPEG")


@pytest.fixture
def controlled_generator() -> ControlledGenerator:
    return ControlledGenerator()


@pytest.fixture
def instant_generator() -> InstantGenerator:
    return InstantGenerator()
