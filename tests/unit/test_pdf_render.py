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
from unittest import mock

from pypdf import PdfReader

from lookbook.core.errors import RenderError
from lookbook.qr.codec import QrConfig
from lookbook.render.assets import Embedded, InlineReport, Unavailable, placeholder_image
from lookbook.render.layout import LABEL_PROFILE, plan_catalog, plan_layout
from lookbook.render.plan import build_render_plan, encode_item_qrs, encode_session_qr
from lookbook.render.pdf_render import render_vector_pdf
from lookbook.render.themes import CUSTOMER, INTERNAL, RANKING, TAGS
from tests.test_support import (
    TEST_ORIGIN,
    make_image_bytes,
    make_item,
    make_items,
    make_metadata,
)


def _page_texts(pdf: bytes) -> list[str]:
    reader = PdfReader(io.BytesIO(pdf))
    return [page.extract_text() or "" for page in reader.pages]


class TestVectorPdf(unittest.TestCase):
    def test_catalog_pages_and_labels(self) -> None:
        plan = build_render_plan(
            make_metadata(),
            make_items(23),
            theme=CUSTOMER,
            descriptor=plan_catalog(),
            assets=InlineReport(),
        )
        pdf = render_vector_pdf(plan)
        self.assertTrue(pdf.startswith(b"%PDF-"))
        texts = _page_texts(pdf)
        self.assertEqual(len(texts), 4)
        for number, text in enumerate(texts[1:], start=2):
            self.assertIn(f"page {number} / 4", text)
        self.assertIn("Spring Exhibition", texts[0])

    def test_landscape_a4_page_size(self) -> None:
        plan = build_render_plan(
            make_metadata(), make_items(1), theme=CUSTOMER, descriptor=plan_catalog(),
            assets=InlineReport(),
        )
        reader = PdfReader(io.BytesIO(render_vector_pdf(plan)))
        box = reader.pages[0].mediabox
        self.assertAlmostEqual(float(box.width) / 72 * 25.4, 297.0, places=0)
        self.assertAlmostEqual(float(box.height) / 72 * 25.4, 210.0, places=0)

    def test_internal_with_qr_and_images(self) -> None:
        url_ok = "https://img.test/ok.png"
        url_bad = "https://img.test/bad.png"
        items = [make_item(1, image_url=url_ok), make_item(2, image_url=url_bad), make_item(3)]
        report = InlineReport(
            assets={
                url_ok: Embedded(make_image_bytes(size=(32, 48)), "image/png"),
                url_bad: Unavailable("timed out"),
            },
            failed_urls=(url_bad,),
        )
        config = QrConfig(width_px=64)
        plan = build_render_plan(
            make_metadata(),
            items,
            theme=INTERNAL,
            descriptor=plan_catalog(),
            assets=report,
            qr_images=encode_item_qrs(items, origin=TEST_ORIGIN, context_id="EX", config=config),
            session_qr_png=encode_session_qr(origin=TEST_ORIGIN, context_id="EX", config=config),
        )
        texts = _page_texts(render_vector_pdf(plan))
        self.assertEqual(len(texts), 2)
        self.assertIn("CONFIDENTIAL", texts[0])
        self.assertIn("A-1", texts[1])

    def test_placeholder_is_drawn_once_per_render(self) -> None:
        urls = [f"https://img.test/{index}.png" for index in range(1, 4)]
        items = [make_item(index, image_url=url) for index, url in enumerate(urls, start=1)]
        report = InlineReport(
            assets={url: Unavailable("timed out") for url in urls}, failed_urls=tuple(urls)
        )
        plan = build_render_plan(
            make_metadata(), items, theme=CUSTOMER, descriptor=plan_catalog(), assets=report
        )
        with mock.patch(
            "lookbook.render.pdf_render.placeholder_image", wraps=placeholder_image
        ) as build:
            render_vector_pdf(plan)
            self.assertEqual(build.call_count, 1)
            render_vector_pdf(plan)
            self.assertEqual(build.call_count, 2)

    def test_ranking_report(self) -> None:
        items = [
            make_item(index, pickup_count=count)
            for index, count in enumerate((3, 1, 0, 5, 2, 1, 1, 4, 2, 3, 6, 2), start=1)
        ]
        plan = build_render_plan(
            make_metadata(),
            sorted(items, key=lambda item: -item.pickup_count),
            theme=RANKING,
            descriptor=plan_catalog(),
            assets=InlineReport(),
        )
        texts = _page_texts(render_vector_pdf(plan))
        self.assertEqual(len(texts), 3)
        self.assertIn("Pickup Ranking Report", texts[0])
        self.assertIn("No.1", texts[1])
        self.assertIn("Pickup Rate", texts[1])
        self.assertIn("No.11", texts[2])
        self.assertIn("page 3 / 3", texts[2])

    def test_tag_sheet(self) -> None:
        plan = build_render_plan(
            make_metadata(),
            make_items(26),
            theme=TAGS,
            descriptor=plan_layout(LABEL_PROFILE),
            assets=InlineReport(),
        )
        texts = _page_texts(render_vector_pdf(plan))
        self.assertEqual(len(texts), 2)
        self.assertIn("A-26", texts[1])

    def test_non_latin_text_falls_back_without_font(self) -> None:
        plan = build_render_plan(
            make_metadata(title="春の展示会"),
            [make_item(name="シャツ")],
            theme=CUSTOMER,
            descriptor=plan_catalog(),
            assets=InlineReport(),
        )
        self.assertTrue(render_vector_pdf(plan).startswith(b"%PDF-"))

    def test_missing_font_raises_render_error(self) -> None:
        plan = build_render_plan(
            make_metadata(), make_items(1), theme=CUSTOMER, descriptor=plan_catalog(),
            assets=InlineReport(),
        )
        with self.assertRaises(RenderError) as ctx:
            render_vector_pdf(plan, font_path="/nonexistent/font.ttf")
        self.assertEqual(ctx.exception.backend, "vector-pdf")

    def test_drawing_failure_names_the_page(self) -> None:
        plan = build_render_plan(
            make_metadata(), make_items(12), theme=CUSTOMER, descriptor=plan_catalog(),
            assets=InlineReport(),
        )
        calls = {"count": 0}

        def flaky(*args, **kwargs):
            calls["count"] += 1
            if calls["count"] == 2:
                raise ValueError("boom")

        with mock.patch("lookbook.render.pdf_render._draw_catalog_page", side_effect=flaky):
            with self.assertRaises(RenderError) as ctx:
                render_vector_pdf(plan)
        self.assertEqual(ctx.exception.page, 3)


if __name__ == "__main__":
    unittest.main()
