import io
from urllib.parse import quote

import pytest
from PIL import Image

from ruru_nft.core.exceptions import FormatError, TranscodeError, UpstreamError
from ruru_nft.services.media_transcoder import (
    MediaTranscoder,
    decode_data_url,
    scaled_dimensions,
)


@pytest.fixture
def transcoder():
    return MediaTranscoder()


@pytest.mark.parametrize(
    "size, expected",
    [
        ((10, 10), (8, 8)),
        ((100, 50), (80, 40)),
        ((101, 57), (80, 45)),
        ((5, 3), (4, 2)),
        ((35, 1234), (28, 987)),
    ],
)
def test_scaled_dimensions(size, expected):
    assert scaled_dimensions(*size) == expected


def test_single_pixel_side_is_kept_at_one_pixel():
    assert scaled_dimensions(1, 1) == (1, 1)
    assert scaled_dimensions(1, 10) == (1, 8)


def test_transcode_scales_both_axes(transcoder, data_url_factory):
    output = transcoder.transcode(data_url_factory(size=(101, 57)))

    image = Image.open(io.BytesIO(output))
    assert image.format == "PNG"
    assert image.size == (80, 45)


def test_transcode_accepts_jpeg_input(transcoder, data_url_factory):
    output = transcoder.transcode(data_url_factory(size=(64, 48), mime="image/jpeg", format="JPEG"))

    image = Image.open(io.BytesIO(output))
    assert image.format == "PNG"
    assert image.size == (51, 38)


def test_transcode_keeps_alpha(transcoder, image_bytes_factory):
    output = transcoder.resize(image_bytes_factory(size=(20, 20), mode="RGBA"))

    image = Image.open(io.BytesIO(output))
    assert image.mode == "RGBA"
    assert image.size == (16, 16)


def test_percent_encoded_data_url_is_decoded(image_bytes_factory, data_url_factory):
    raw = image_bytes_factory(size=(8, 8))
    data_url = quote(data_url_factory(size=(8, 8)), safe="")

    assert decode_data_url(data_url) == raw


def test_missing_base64_marker_is_format_error(transcoder):
    with pytest.raises(FormatError) as exc_info:
        transcoder.transcode("https://example.com/kiwi.png")

    assert exc_info.value.error == "Invalid base64 data"
    assert exc_info.value.status_code == 500
    assert isinstance(exc_info.value, UpstreamError)


def test_undecodable_image_is_transcode_error(transcoder):
    with pytest.raises(TranscodeError):
        transcoder.transcode("data:image/png;base64,bm90IGFuIGltYWdl")
