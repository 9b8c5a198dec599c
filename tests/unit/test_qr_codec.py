# Copyright (C) 2026 Alex Stoyanov
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License along with this program.
# If not, see <https://www.gnu.org/licenses/>.


import io
import unittest

from PIL import Image

from lookbook.core.errors import EncodingError
from lookbook.qr.codec import (
    QrConfig,
    encode_qr,
    encode_qr_with_config,
    make_qr,
    png_data_uri,
)
from tests.test_support import PNG_SIGNATURE


class TestQrCodec(unittest.TestCase):
    def test_png_has_requested_width(self) -> None:
        for width in (64, 200, 333):
            with self.subTest(width=width):
                png = encode_qr("https://lookbook.test/scan-item/1?ex=EX", width_px=width)
                self.assertTrue(png.startswith(PNG_SIGNATURE))
                with Image.open(io.BytesIO(png)) as img:
                    self.assertEqual(img.size, (width, width))

    def test_encoding_is_deterministic(self) -> None:
        payload = "https://lookbook.test/scan-item/item-1?ex=EX24"
        self.assertEqual(encode_qr(payload), encode_qr(payload))
        config = QrConfig(width_px=120, margin=2)
        self.assertEqual(encode_qr_with_config(payload, config), encode_qr_with_config(payload, config))

    def test_uses_medium_error_correction(self) -> None:
        self.assertEqual(make_qr("hello").error, "M")

    def test_colors_are_applied(self) -> None:
        png = encode_qr("colors", width_px=50, dark="#ff0000", light=(0, 0, 255), margin=1)
        with Image.open(io.BytesIO(png)) as img:
            colors = {color for _count, color in img.convert("RGB").getcolors(maxcolors=16)}
        self.assertEqual(colors, {(255, 0, 0), (0, 0, 255)})

    def test_overflow_raises_encoding_error(self) -> None:
        with self.assertRaises(EncodingError):
            encode_qr("x" * 5000)
        with self.assertRaises(EncodingError):
            encode_qr("x" * 200, version=1)

    def test_invalid_geometry_raises(self) -> None:
        with self.assertRaises(ValueError):
            encode_qr("hello", width_px=0)
        with self.assertRaises(ValueError):
            encode_qr("hello", margin=-1)

    def test_data_uri(self) -> None:
        uri = png_data_uri(encode_qr_with_config("hello", QrConfig()))
        self.assertTrue(uri.startswith("data:image/png;base64,"))
        self.assertEqual(png_data_uri(b"\x00"), "data:image/png;base64,AA==")


if __name__ == "__main__":
    unittest.main()
