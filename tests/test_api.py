from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from fastapi.testclient import TestClient

from api.main import app
from fetchers.common import FetchError
from test_gift_page import write_fixture_documents


class ApiContractTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.data_dir = Path(self._tmp.name)
        write_fixture_documents(self.data_dir)
        self._env = patch.dict(
            os.environ,
            {
                "SILVER_GIFT_DATA": str(self.data_dir),
                "SILVER_GIFT_RETRY_DELAY": "0",
                "SILVER_GIFT_ENDPOINT_GAP": "0",
            },
        )
        self._env.start()
        self.client = TestClient(app)

    def tearDown(self) -> None:
        self._env.stop()
        self._tmp.cleanup()

    def test_index_renders_gift_page(self) -> None:
        with patch("fetchers.live_price.fetch_json", return_value={"price": 50.0}):
            resp = self.client.get("/", params={"recipient": "emma"})
        self.assertEqual(200, resp.status_code)
        self.assertIn("text/html", resp.headers["content-type"])
        self.assertIn("<strong>Emma</strong>", resp.text)
        self.assertIn("$50.00", resp.text)
        self.assertIn('id="priceChart"', resp.text)

    def test_index_unknown_recipient_renders_selector(self) -> None:
        resp = self.client.get("/", params={"recipient": "nobody"})
        self.assertEqual(200, resp.status_code)
        self.assertIn("Select Your Silver Gift", resp.text)
        self.assertIn('<option value="emma">Emma</option>', resp.text)

    def test_index_catch_all_renders_error(self) -> None:
        with patch("api.main.build_page_view", side_effect=RuntimeError("boom")):
            resp = self.client.get("/", params={"recipient": "emma"})
        self.assertEqual(200, resp.status_code)
        self.assertIn("Please try refreshing the page.", resp.text)
        self.assertIn("Try Again", resp.text)

    def test_gift_json_view(self) -> None:
        with patch("fetchers.live_price.fetch_json", side_effect=FetchError("down")), patch(
            "fetchers.live_price.time.sleep"
        ):
            resp = self.client.get("/v1/gift", params={"recipient": "emma"})
        self.assertEqual(200, resp.status_code)
        body = resp.json()
        self.assertEqual("gift", body["kind"])
        self.assertTrue(body["is_last_known"])
        self.assertEqual("$49.03", body["total_value"])

    def test_current_price_endpoint(self) -> None:
        with patch("fetchers.live_price.fetch_json", return_value={"price": 31.5}):
            resp = self.client.get("/v1/price/current")
        self.assertEqual(200, resp.status_code)
        body = resp.json()
        self.assertEqual(31.5, body["price"])
        self.assertTrue(body["is_live"])

    def test_current_price_404_without_any_data(self) -> None:
        (self.data_dir / "daily-prices.json").write_text("[]")
        with patch("fetchers.live_price.fetch_json", side_effect=FetchError("down")), patch(
            "fetchers.live_price.time.sleep"
        ):
            resp = self.client.get("/v1/price/current")
        self.assertEqual(404, resp.status_code)

    def test_history_filters_by_date(self) -> None:
        resp = self.client.get("/v1/prices/history", params={"start": "2026-10-16"})
        self.assertEqual(200, resp.status_code)
        self.assertEqual([{"date": "2026-10-16", "price": 49.03, "source": None}], resp.json()["items"])

    def test_recipients_endpoint(self) -> None:
        resp = self.client.get("/v1/recipients")
        self.assertEqual(200, resp.status_code)
        self.assertEqual([{"recipient_id": "emma", "recipient_name": "Emma"}], resp.json()["items"])


if __name__ == "__main__":
    unittest.main()
