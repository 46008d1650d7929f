from __future__ import annotations

import unittest

from fetchers.endpoints import (
    FALLBACK_ENDPOINT,
    MissingApiKeyError,
    build_endpoint_url,
    is_endpoint_available,
    select_endpoints,
)
from models import EndpointConfig

CONFIG = [
    {
        "name": "metals-api",
        "url": "https://metals.example/latest?access_key={metals_key}",
        "price-path": "rates.XAG",
        "authentication": "metals_key",
        "priority": 3,
    },
    {
        "name": "gold-api",
        "url": "https://gold.example/price/XAG",
        "price-path": "price",
        "authentication": "none",
        "priority": 2,
    },
    {
        "name": "backup",
        "url": "https://backup.example/xag",
        "price-path": "data.price",
        "authentication": "none",
        "priority": 1,
    },
]


class SelectEndpointsTests(unittest.TestCase):
    def test_sorted_by_priority_and_auth_filtered(self) -> None:
        endpoints = select_endpoints(CONFIG, {})
        self.assertEqual(["backup", "gold-api"], [e.name for e in endpoints])

    def test_auth_endpoint_kept_when_key_present(self) -> None:
        endpoints = select_endpoints(CONFIG, {"metals_key": "secret"})
        self.assertEqual(["backup", "gold-api", "metals-api"], [e.name for e in endpoints])

    def test_invalid_document_uses_fallback(self) -> None:
        self.assertEqual([FALLBACK_ENDPOINT], select_endpoints(None, {}))
        self.assertEqual([FALLBACK_ENDPOINT], select_endpoints({"name": "x"}, {}))

    def test_invalid_entries_skipped(self) -> None:
        payload = [{"name": "broken", "priority": "first"}, CONFIG[1]]
        self.assertEqual(["gold-api"], [e.name for e in select_endpoints(payload, {})])

    def test_nothing_available_uses_fallback(self) -> None:
        self.assertEqual([FALLBACK_ENDPOINT], select_endpoints([CONFIG[0]], {}))


class EndpointUrlTests(unittest.TestCase):
    def setUp(self) -> None:
        self.endpoint = EndpointConfig.model_validate(CONFIG[0])

    def test_availability_requires_query_key(self) -> None:
        self.assertFalse(is_endpoint_available(self.endpoint, {}))
        self.assertFalse(is_endpoint_available(self.endpoint, {"metals_key": ""}))
        self.assertTrue(is_endpoint_available(self.endpoint, {"metals_key": "k"}))
        self.assertTrue(is_endpoint_available(FALLBACK_ENDPOINT, {}))

    def test_key_substituted_into_template(self) -> None:
        url = build_endpoint_url(self.endpoint, {"metals_key": "a b"})
        self.assertEqual("https://metals.example/latest?access_key=a%20b", url)

    def test_missing_key_raises(self) -> None:
        with self.assertRaises(MissingApiKeyError):
            build_endpoint_url(self.endpoint, {})

    def test_no_auth_url_unchanged(self) -> None:
        self.assertEqual(FALLBACK_ENDPOINT.url, build_endpoint_url(FALLBACK_ENDPOINT, {"metals_key": "k"}))


if __name__ == "__main__":
    unittest.main()
