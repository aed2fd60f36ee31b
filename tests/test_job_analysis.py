"""Tests for job posting analysis and resume matching."""

import asyncio

import httpx
import pytest

from interview_prep.errors import ValidationError
from interview_prep.services.analysis.keyword_matcher import calculate_role_match
from interview_prep.services.external.job_posting import fetch_job_description, html_to_text

from .fakes import ORIGINAL_RESUME

POSTING_HTML = """
<html><head><style>body { color: red }</style><script>track()</script></head>
<body><h1>Platform Engineer</h1>
<p>Globex is hiring a platform engineer to run Kubernetes clusters, build Terraform modules
and keep our payments infrastructure reliable. Five years of experience required.</p></body></html>
"""

ANALYSIS = {"company": "Globex", "role": "Platform Engineer", "requiredSkills": ["Kubernetes"]}


def _mock_client(handler):
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestJobPostingFetch:
    def test_html_to_text_drops_scripts_and_styles(self):
        text = html_to_text(POSTING_HTML)
        assert "track()" not in text
        assert "color: red" not in text
        assert text.startswith("Platform Engineer Globex is hiring")

    def test_fetches_and_extracts(self):
        async def run():
            async with _mock_client(lambda request: httpx.Response(200, text=POSTING_HTML)) as client:
                return await fetch_job_description("https://jobs.example.com/1", client=client)

        assert "Kubernetes clusters" in asyncio.run(run())

    def test_http_error_is_400(self):
        async def run():
            async with _mock_client(lambda request: httpx.Response(404)) as client:
                return await fetch_job_description("https://jobs.example.com/404", client=client)

        with pytest.raises(ValidationError, match="Could not fetch job description"):
            asyncio.run(run())

    def test_thin_page_is_400(self):
        async def run():
            async with _mock_client(lambda request: httpx.Response(200, text="<p>Apply now</p>")) as client:
                return await fetch_job_description("https://jobs.example.com/thin", client=client)

        with pytest.raises(ValidationError):
            asyncio.run(run())


class TestJobAnalyzeRoute:
    def test_analyzes_description(self, client, llm):
        llm.replies = [ANALYSIS]
        resp = client.post("/api/job/analyze", json={"jobDescription": "Platform\x00 Engineer at Globex"})
        assert resp.status_code == 200
        data = resp.json()
        assert data == {"description": "Platform  Engineer at Globex", "analysis": ANALYSIS}
        assert "Platform  Engineer at Globex" in llm.calls[0]["user"]

    def test_fetches_when_only_url_given(self, client, llm, monkeypatch):
        async def fake_fetch(url, timeout=30.0):
            return "Fetched posting text for a platform engineer"

        monkeypatch.setattr("interview_prep.services.llm.job_analyzer.fetch_job_description", fake_fetch)
        llm.replies = [ANALYSIS]
        resp = client.post("/api/job/analyze", json={"url": "https://jobs.example.com/1"})
        assert resp.status_code == 200
        assert resp.json()["url"] == "https://jobs.example.com/1"
        assert resp.json()["description"] == "Fetched posting text for a platform engineer"

    def test_description_wins_over_url(self, client, llm, monkeypatch):
        async def fail_fetch(url, timeout=30.0):
            raise AssertionError("should not fetch")

        monkeypatch.setattr("interview_prep.services.llm.job_analyzer.fetch_job_description", fail_fetch)
        llm.replies = [ANALYSIS]
        resp = client.post("/api/job/analyze", json={"description": "Run clusters", "url": "https://x"})
        assert resp.status_code == 200

    def test_missing_description_is_400(self, client):
        resp = client.post("/api/job/analyze", json={"description": "  "})
        assert resp.status_code == 400
        assert resp.json() == {"error": "Job description is required"}

    def test_generation_failure_is_500(self, client, llm):
        llm.replies = ["<html>"]
        resp = client.post("/api/job/analyze", json={"description": "Run clusters"})
        assert resp.status_code == 500


class TestKeywordMatcher:
    def test_coverage(self):
        report = calculate_role_match(ORIGINAL_RESUME, "Python engineer with Kafka and SQL")
        assert report["found"] == ["engineer", "python"]
        assert report["missing"] == ["kafka", "with"]
        assert report["percentage"] == 50

    def test_empty_description(self):
        assert calculate_role_match(ORIGINAL_RESUME, "a an of") == {"percentage": 0, "found": [], "missing": []}


class TestMatchRoute:
    def test_combines_model_and_keyword_reports(self, client, llm):
        llm.replies = [{"matchPercentage": 72, "strengths": ["Python"]}]
        resp = client.post("/api/resume/match", json={
            "resumeData": ORIGINAL_RESUME,
            "jobDescription": "Python engineer with Kafka",
        })
        assert resp.status_code == 200
        data = resp.json()
        assert data["success"] is True
        assert data["matchAnalysis"]["matchPercentage"] == 72
        assert data["keywordCoverage"]["missing"] == ["kafka", "with"]

    def test_requires_both_inputs(self, client):
        resp = client.post("/api/resume/match", json={"resumeData": ORIGINAL_RESUME})
        assert resp.status_code == 400
        assert resp.json() == {"error": "Resume data and job description are required"}
