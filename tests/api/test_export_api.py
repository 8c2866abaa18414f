"""API tests for Export endpoints."""

from pathlib import Path

import pymupdf
import pytest
from httpx import AsyncClient

from manuscript.infrastructure.config.settings import Settings


async def create_chapter(client: AsyncClient, title: str, content: str = "") -> dict:
    response = await client.post("/api/v1/chapters", json={"title": title, "content": content})
    assert response.status_code == 201
    return response.json()


class TestExportAPI:
    """API tests for export endpoints."""

    @pytest.mark.asyncio
    async def test_export_empty_variant(self, client: AsyncClient):
        response = await client.post("/api/v1/export/pdf", json={"bookType": "booklet"})

        assert response.status_code == 400

        response = await client.post("/api/v1/export/web", json={})
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_export_pdf_after_delete_and_reorder(self, client: AsyncClient, test_settings: Settings):
        """Test create A, B, C, delete B, swap A and C, then export."""
        a = await create_chapter(client, "A", "alpha text")
        b = await create_chapter(client, "B", "beta text")
        c = await create_chapter(client, "C", "gamma text")

        assert (await client.delete(f"/api/v1/chapters/{b['id']}")).status_code == 204
        response = await client.post(
            "/api/v1/chapters/reorder",
            json={"chapters": [{"id": c["id"], "order_index": 0}, {"id": a["id"], "order_index": 1}]},
        )
        assert response.status_code == 200

        response = await client.post("/api/v1/export/pdf", json={"bookType": "full", "title": "Scenario"})

        assert response.status_code == 200
        result = response.json()
        assert result["format"] == "document"
        assert result["chapter_count"] == 2
        assert result["total_words"] == 4

        path = Path(result["path"])
        assert path.parent == (Path(test_settings.EXPORT_DIR) / "pdf").resolve()
        doc = pymupdf.open(str(path))
        try:
            contents = doc[1].get_text()
            assert "Chapter 1: C" in contents
            assert "Chapter 2: A" in contents
            assert "Scenario" in doc[0].get_text()
        finally:
            doc.close()

    @pytest.mark.asyncio
    async def test_export_web(self, client: AsyncClient, test_settings: Settings):
        await create_chapter(client, "One", "# Start\n\nHello")
        await create_chapter(client, "Two", "Bye")

        response = await client.post("/api/v1/export/web", json={"bookType": "full"})

        assert response.status_code == 200
        result = response.json()
        assert result["format"] == "site"
        assert result["files"] == 4

        site = Path(result["path"])
        assert site.parent == (Path(test_settings.EXPORT_DIR) / "web").resolve()
        index = (site / "index.html").read_text(encoding="utf-8")
        assert "Test Manuscript" in index
        assert "<h2>Start</h2>" in (site / "chapter-1.html").read_text(encoding="utf-8")
