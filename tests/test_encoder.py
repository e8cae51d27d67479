"""Tests for upload encoding."""

import base64
from io import BytesIO
from pathlib import Path

import pytest
import pytest_mock
from PIL import Image

from virtual_stylist.core.encoder import (
    DATA_URI_PREFIX,
    ImageReadError,
    encode_image,
    read_image_file,
    strip_data_uri,
    to_data_uri,
)


def _decode(uri: str) -> Image.Image:
    assert uri.startswith(DATA_URI_PREFIX)
    return Image.open(BytesIO(base64.b64decode(uri[len(DATA_URI_PREFIX):])))


def test_jpeg_upload_is_kept_as_is(jpeg_bytes: bytes) -> None:
    image = encode_image(jpeg_bytes, filename="shirt.jpg", content_type="image/jpeg")

    assert image.encoded_payload == DATA_URI_PREFIX + base64.b64encode(jpeg_bytes).decode()
    assert image.preview_uri == image.encoded_payload
    assert image.filename == "shirt.jpg"
    assert image.content_type == "image/jpeg"


def test_png_upload_is_converted_to_jpeg(png_bytes: bytes) -> None:
    image = encode_image(png_bytes, filename="shirt.png", content_type="image/png")

    decoded = _decode(image.encoded_payload)
    assert decoded.format == "JPEG"
    assert decoded.mode == "RGB"
    assert decoded.size == (8, 8)


def test_empty_upload_is_rejected() -> None:
    with pytest.raises(ImageReadError):
        encode_image(b"", filename="empty.jpg")


def test_non_image_upload_is_rejected() -> None:
    with pytest.raises(ImageReadError) as excinfo:
        encode_image(b"definitely not an image", filename="notes.txt")

    assert isinstance(excinfo.value, OSError)


def test_oversized_upload_is_rejected(
    png_bytes: bytes, mocker: pytest_mock.MockerFixture
) -> None:
    # 8x8 is over twice this limit, which Pillow treats as a decompression bomb
    mocker.patch.object(Image, "MAX_IMAGE_PIXELS", 10)

    with pytest.raises(ImageReadError, match="too large"):
        encode_image(png_bytes, filename="huge.png")


def test_read_image_file(tmp_path: Path, png_bytes: bytes) -> None:
    path = tmp_path / "jacket.png"
    path.write_bytes(png_bytes)

    image = read_image_file(path)

    assert image.filename == "jacket.png"
    assert _decode(image.encoded_payload).format == "JPEG"


def test_read_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ImageReadError):
        read_image_file(tmp_path / "missing.jpg")


def test_data_uri_helpers() -> None:
    assert to_data_uri("AAA") == "data:image/jpeg;base64,AAA"
    assert strip_data_uri("data:image/png;base64,BBB") == "BBB"
    assert strip_data_uri("CCC") == "CCC"
