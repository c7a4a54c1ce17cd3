"""Tests for ImageCodec and the Pillow helpers."""

import pytest
import numpy as np
import tempfile
from pathlib import Path
from PIL import Image

from iirblur import blur_image, blur_file, BlurParams
from iirblur.codecs import ImageCodec
from iirblur.core import BlurEngine, InvalidImageError, blur


class TestImageCodec:
    @pytest.fixture
    def sample_image(self):
        rng = np.random.default_rng(3)
        return rng.integers(0, 256, (8, 5, 4), dtype=np.uint8)

    def test_buffer_layout(self):
        # 2x1 image, interleaved RGBA
        data = bytes([1, 2, 3, 4, 5, 6, 7, 8])
        img = ImageCodec.from_buffer(data, width=2, height=1, channels=4)

        assert img.shape == (1, 2, 4)
        assert img[0, 1].tolist() == [5, 6, 7, 8]
        assert ImageCodec.to_buffer(img) == data

    def test_buffer_is_writable_copy(self):
        data = bytearray(12)
        img = ImageCodec.from_buffer(data, width=2, height=2, channels=3)
        img[0, 0, 0] = 9
        assert data[0] == 0

    def test_buffer_length_mismatch(self):
        with pytest.raises(InvalidImageError):
            ImageCodec.from_buffer(bytes(15), width=2, height=2, channels=4)

    def test_buffer_zero_dimension(self):
        with pytest.raises(InvalidImageError):
            ImageCodec.from_buffer(b"", width=0, height=2, channels=4)

    @pytest.mark.parametrize("values, dtype", [
        ([300, 0, 1, 255], np.int64),
        ([0.7, 0.0, 0.0, 255.0], np.float64),
    ])
    def test_buffer_rejects_non_uint8_array(self, values, dtype):
        with pytest.raises(InvalidImageError, match="uint8"):
            ImageCodec.from_buffer(np.array(values, dtype=dtype), width=1, height=1, channels=4)

    def test_buffer_accepts_uint8_array(self):
        data = np.arange(24, dtype=np.uint8).reshape(2, 12)
        img = ImageCodec.from_buffer(data, width=3, height=2, channels=4)

        assert img.shape == (2, 3, 4)
        assert img[1, 0].tolist() == [12, 13, 14, 15]

    def test_from_pil_converts_to_rgba(self):
        img = Image.new("RGB", (3, 2), (10, 20, 30))
        arr = ImageCodec.from_pil(img)

        assert arr.shape == (2, 3, 4)
        assert arr[0, 0].tolist() == [10, 20, 30, 255]

    def test_save_load(self, sample_image):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "nested" / "img.png"

            ImageCodec.save(path, sample_image)
            loaded = ImageCodec.load(path)

            np.testing.assert_array_equal(loaded, sample_image)

    def test_save_jpeg_drops_alpha(self, sample_image):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "img.jpg"
            ImageCodec.save(path, sample_image)

            with Image.open(path) as img:
                assert img.mode == "RGB"
                assert img.size == (5, 8)


class TestPillowHelpers:
    def test_blur_image_matches_engine(self):
        img = Image.new("RGBA", (9, 9), (0, 0, 0, 0))
        img.putpixel((4, 4), (255, 128, 64, 255))

        out = blur_image(img, 1.5, 1.5)

        assert out.mode == "RGBA"
        assert out.size == img.size
        np.testing.assert_array_equal(np.array(out), blur(1.5, 1.5, np.array(img)))

    def test_blur_image_uses_engine_steps(self):
        img = Image.new("RGBA", (15, 15), (0, 0, 0, 0))
        img.putpixel((7, 7), (255, 255, 255, 255))
        engine = BlurEngine(steps=8)

        out = np.array(blur_image(img, 2.0, 2.0, engine=engine))

        np.testing.assert_array_equal(out, BlurEngine(steps=8).blur(2.0, 2.0, np.array(img)))
        assert not np.array_equal(out, BlurEngine(steps=4).blur(2.0, 2.0, np.array(img)))

    def test_blur_image_explicit_steps_override_engine(self):
        img = Image.new("RGBA", (15, 15), (0, 0, 0, 0))
        img.putpixel((7, 7), (255, 255, 255, 255))

        out = np.array(blur_image(img, 2.0, 2.0, steps=2, engine=BlurEngine(steps=8)))

        np.testing.assert_array_equal(out, BlurEngine(steps=2).blur(2.0, 2.0, np.array(img)))

    def test_blur_image_converts_mode(self):
        img = Image.new("L", (6, 4), 100)
        out = blur_image(img, 0.0, 0.0)

        assert out.mode == "RGBA"
        assert np.array(out)[0, 0].tolist() == [100, 100, 100, 255]

    def test_blur_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            src = Path(tmpdir) / "in.png"
            dst = Path(tmpdir) / "out" / "in.png"
            Image.new("RGB", (10, 10), (200, 100, 50)).save(src)

            blur_file(src, dst, BlurParams(sigma_x=2.0, sigma_y=2.0))

            assert dst.exists()
            with Image.open(dst) as out:
                assert out.size == (10, 10)
