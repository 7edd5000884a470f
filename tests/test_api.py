import importlib.util
import unittest

import requests

from application.refinement.service import RefinementEngine
from domain.entities import ContentChunkMatch
from domain.interfaces import SimilaritySearchClient
from infrastructure.config import Container, ContainerConfig, build_default_container


@unittest.skipIf(importlib.util.find_spec("httpx") is None, "httpx not installed")
class TestRefineApi(unittest.TestCase):
    def setUp(self):
        from fastapi.testclient import TestClient

        from ui.api.main import create_app

        self.container = build_default_container(ContainerConfig(repository="memory"))
        self.client = TestClient(create_app(self.container))
        response = self.client.post(
            "/api/sections",
            json={
                "sections": [
                    {
                        "id": "s1",
                        "original_field_name": "Headline",
                        "section_path": "/content/homepage-section/headline",
                        "tags": ["Hero"],
                        "text": "spring launch headline",
                    },
                    {
                        "id": "s2",
                        "original_field_name": "Body",
                        "tags": ["Hero", "CTA"],
                        "text": "shop the spring collection",
                    },
                ]
            },
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"imported": 2})

    def test_refine_returns_counted_chips(self):
        response = self.client.get("/api/refine", params={"query": "homepage-section headline", "limit": 5})
        self.assertEqual(response.status_code, 200)
        chips = response.json()
        self.assertLessEqual(len(chips), 5)
        pairs = {(chip["value"], chip["type"]): chip["count"] for chip in chips}
        self.assertIn(("homepage-section", "sectionKey"), pairs)
        self.assertEqual(pairs[("homepage-section", "sectionKey")], 1)
        self.assertTrue(any(chip["type"] == "sectionName" for chip in chips))

    def test_blank_query_is_rejected(self):
        self.assertEqual(self.client.get("/api/refine", params={"query": "  "}).status_code, 400)
        self.assertEqual(self.client.get("/api/refine").status_code, 422)

    def test_sections_are_listed(self):
        response = self.client.get("/api/sections")
        self.assertEqual([item["id"] for item in response.json()], ["s1", "s2"])

    def test_search_with_selected_chips(self):
        response = self.client.post(
            "/api/search",
            json={"query": "spring", "chips": [{"value": "CTA", "type": "Tag"}], "top_k": 5},
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual([hit["section_id"] for hit in response.json()["results"]], ["s2"])

    def test_reimporting_a_section_replaces_its_chips(self):
        for tags in (["Old"], ["New"]):
            response = self.client.post(
                "/api/sections",
                json={"sections": [{"id": "s3", "original_field_name": "Promo", "tags": tags, "text": "summer promo"}]},
            )
            self.assertEqual(response.status_code, 200)

        hits = self.client.post("/api/search", json={"query": "summer promo", "top_k": 10}).json()["results"]
        reimported = [hit for hit in hits if hit["section_id"] == "s3"]
        self.assertEqual(len(reimported), 1)
        self.assertEqual(reimported[0]["section"]["tags"], ["New"])

        chips = self.client.get("/api/refine", params={"query": "summer promo", "limit": 15}).json()
        pairs = {(chip["value"], chip["type"]): chip["count"] for chip in chips}
        self.assertEqual(pairs[("New", "Tag")], 1)
        self.assertNotIn(("Old", "Tag"), pairs)

    def test_backend_failure_maps_to_bad_gateway(self):
        from fastapi.testclient import TestClient

        from ui.api.main import create_app

        class FailingSearchClient(SimilaritySearchClient):
            def search(self, query, *, limit, threshold=None, filters=None) -> list[ContentChunkMatch]:
                raise requests.ConnectionError("backend down")

        failing = FailingSearchClient()
        container = Container(
            embedder=None,
            search_client=failing,
            section_repository=self.container.section_repository,
            refinement_engine=RefinementEngine(failing, self.container.section_repository),
            settings=self.container.settings,
        )
        client = TestClient(create_app(container))
        self.assertEqual(client.post("/api/search", json={"query": "hero"}).status_code, 502)
        self.assertEqual(client.get("/api/refine", params={"query": "hero"}).status_code, 502)


if __name__ == "__main__":
    unittest.main()
