"""Tests for the resume tailoring pipeline and its route."""

import asyncio
import copy
import json

import pytest

from interview_prep.errors import GenerationError, ValidationError
from interview_prep.services.llm.tailor import build_tailor_prompt, tailor_resume, validate_tailored_resume

from .fakes import ORIGINAL_RESUME, TAILORED_RESUME, FakeLLM, FakeObjectStore


def _tailor_body(**overrides):
    body = {
        "resumeData": ORIGINAL_RESUME,
        "jobDescription": "We need a backend engineer with Kafka experience.",
        "companyName": "Globex",
        "roleTitle": "Senior Backend Engineer",
    }
    body.update(overrides)
    return body


class TestTailorRoute:
    def test_tailor_stores_envelope(self, client, store, llm):
        llm.replies = [copy.deepcopy(TAILORED_RESUME)]
        resp = client.post("/api/resume/tailor", json=_tailor_body())
        assert resp.status_code == 200
        data = resp.json()
        assert data["success"] is True
        assert data["tailoredResume"]["summary"] == TAILORED_RESUME["summary"]
        assert data["metadata"]["companyName"] == "Globex"
        assert data["metadata"]["roleTitle"] == "Senior Backend Engineer"
        assert data["metadata"]["createdAt"].endswith("Z")
        assert "storageError" not in data

        assert len(store.puts) == 1
        key = store.puts[0]
        assert key.startswith("tailored-resumes/")
        assert key.endswith("-Senior-Backend-Engineer.json")
        assert data["s3Url"] == f"s3://test-bucket/{key}"

        envelope = json.loads(store.objects[key]["body"])
        assert envelope["companyName"] == "Globex"
        assert envelope["originalResume"] == ORIGINAL_RESUME
        assert envelope["tailoredResume"] == data["tailoredResume"]
        assert envelope["document"] == data["document"]
        assert store.objects[key]["metadata"]["role"] == "Senior Backend Engineer"

    def test_storage_failure_still_returns_resume(self, client, store, llm):
        store.fail_put = True
        llm.replies = [copy.deepcopy(TAILORED_RESUME)]
        resp = client.post("/api/resume/tailor", json=_tailor_body())
        assert resp.status_code == 200
        data = resp.json()
        assert data["success"] is True
        assert data["s3Url"] is None
        assert data["tailoredResume"]["summary"] == TAILORED_RESUME["summary"]
        assert "Failed to store" in data["storageError"]

    def test_numeric_phone_and_structured_skills_pass_through(self, client, store, llm):
        reply = copy.deepcopy(TAILORED_RESUME)
        reply["contact"]["phone"] = 5550100
        reply["skills"]["technical"] = [{"name": "Python", "level": "expert"}, "Go"]
        llm.replies = [reply]
        resp = client.post("/api/resume/tailor", json=_tailor_body())
        assert resp.status_code == 200
        data = resp.json()
        assert data["tailoredResume"]["contact"]["phone"] == "5550100"
        assert data["tailoredResume"]["skills"]["technical"] == [{"name": "Python", "level": "expert"}, "Go"]
        assert "Technical Skills: Python, Go" in data["document"]
        stored = json.loads(store.objects[store.puts[0]]["body"])
        assert stored["tailoredResume"]["skills"]["technical"][0] == {"name": "Python", "level": "expert"}

    def test_unconfigured_store_skips_persistence(self, client, store, llm):
        store.configured = False
        llm.replies = [copy.deepcopy(TAILORED_RESUME)]
        resp = client.post("/api/resume/tailor", json=_tailor_body())
        assert resp.status_code == 200
        assert resp.json()["s3Url"] is None
        assert store.puts == []

    @pytest.mark.parametrize("body", [
        _tailor_body(jobDescription=""),
        _tailor_body(jobDescription="   "),
        _tailor_body(resumeData=None),
        {"jobDescription": "Backend role"},
    ])
    def test_missing_input_is_400(self, client, llm, body):
        resp = client.post("/api/resume/tailor", json=body)
        assert resp.status_code == 400
        assert resp.json() == {"error": "Resume data and job description are required"}
        assert llm.calls == []

    def test_invalid_json_reply_is_500(self, client, store, llm):
        llm.replies = ["this is not json"]
        resp = client.post("/api/resume/tailor", json=_tailor_body())
        assert resp.status_code == 500
        assert "invalid JSON" in resp.json()["error"]
        assert store.puts == []

    def test_reply_without_resume_sections_is_500(self, client, store, llm):
        llm.replies = [{"message": "sorry"}]
        resp = client.post("/api/resume/tailor", json=_tailor_body())
        assert resp.status_code == 500
        assert "details" in resp.json()
        assert store.puts == []

    def test_generation_failure_is_500(self, client, llm):
        llm.replies = [GenerationError("Generation service request failed", details="upstream 502")]
        resp = client.post("/api/resume/tailor", json=_tailor_body())
        assert resp.status_code == 500
        assert resp.json() == {"error": "Generation service request failed", "details": "upstream 502"}


class TestTailorPipeline:
    def test_returns_result_without_store(self):
        llm = FakeLLM([copy.deepcopy(TAILORED_RESUME)])
        result = asyncio.run(tailor_resume(llm, None, ORIGINAL_RESUME, "Backend role"))
        assert result.s3_url is None
        assert result.storage_error is None
        assert "PROFESSIONAL SUMMARY" in result.document

    def test_default_names_in_envelope(self):
        llm = FakeLLM([copy.deepcopy(TAILORED_RESUME)])
        store = FakeObjectStore()
        asyncio.run(tailor_resume(llm, store, ORIGINAL_RESUME, "Backend role"))
        key = store.puts[0]
        assert key.endswith("-resume.json")
        envelope = json.loads(store.objects[key]["body"])
        assert envelope["companyName"] == "Unknown Company"
        assert envelope["roleTitle"] == "Unknown Role"

    def test_missing_description_raises(self):
        with pytest.raises(ValidationError):
            asyncio.run(tailor_resume(FakeLLM(), None, ORIGINAL_RESUME, None))

    def test_prompt_carries_inputs(self):
        prompt = build_tailor_prompt(ORIGINAL_RESUME, "Kafka and Go", "Globex", "SRE")
        assert "COMPANY: Globex" in prompt
        assert "ROLE: SRE" in prompt
        assert "Kafka and Go" in prompt
        assert '"summary": "Engineer."' in prompt


class TestTailoredResumeValidation:
    def test_accepts_loose_shapes(self):
        resume = validate_tailored_resume({
            "summary": "x",
            "skills": ["Go", "Rust"],
            "education": "BSc, MIT",
            "contact": "dana@example.com",
            "experience": {"company": "A", "role": "B", "achievements": None},
        })
        assert resume.skills == ["Go", "Rust"]
        assert resume.education == ["BSc, MIT"]
        assert resume.experience[0].achievements == []

    def test_grouped_skills(self):
        resume = validate_tailored_resume(copy.deepcopy(TAILORED_RESUME))
        assert resume.skills.technical == ["Python", "Kafka", "PostgreSQL"]
        assert resume.education[0].year == "2016"
        assert resume.tailoring_notes.keywords_added == ["Kafka"]

    def test_numeric_scalars_become_text(self):
        payload = copy.deepcopy(TAILORED_RESUME)
        payload["contact"]["phone"] = 5550100
        payload["experience"][0]["duration"] = 3
        payload["education"][0]["gpa"] = 3.8
        resume = validate_tailored_resume(payload)
        assert resume.contact.phone == "5550100"
        assert resume.experience[0].duration == "3"
        assert resume.education[0].gpa == "3.8"

    def test_structured_list_entries_are_kept(self):
        payload = copy.deepcopy(TAILORED_RESUME)
        payload["skills"]["technical"] = [{"name": "Python", "level": "expert"}, "Go"]
        payload["experience"][0]["achievements"] = [{"text": "Cut latency by 40%", "metric": 40}]
        data = validate_tailored_resume(payload).to_json()
        assert data["skills"]["technical"] == [{"name": "Python", "level": "expert"}, "Go"]
        assert data["experience"][0]["achievements"] == [{"text": "Cut latency by 40%", "metric": 40}]

    def test_unknown_fields_survive(self):
        payload = dict(copy.deepcopy(TAILORED_RESUME), projects=[{"name": "ledger"}])
        assert validate_tailored_resume(payload).to_json()["projects"] == [{"name": "ledger"}]

    @pytest.mark.parametrize("payload", [{}, {"notes": "nothing useful"}, {"summary": ""}])
    def test_rejects_payload_without_sections(self, payload):
        with pytest.raises(GenerationError):
            validate_tailored_resume(payload)
