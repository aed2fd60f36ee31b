"""Tests for plain-text and PDF resume rendering."""

import copy

from interview_prep.schemas.resume import ResumeData
from interview_prep.services.rendering.pdf import _date_range, _flat_skills, render_resume_pdf
from interview_prep.services.rendering.plaintext import render_resume_document

from .fakes import TAILORED_RESUME


def _resume(**overrides):
    return ResumeData.model_validate(dict(copy.deepcopy(TAILORED_RESUME), **overrides))


class TestPlainTextDocument:
    def test_full_layout(self):
        resume = _resume(contact={
            "email": "dana@example.com",
            "phone": "555-0100",
            "location": "Berlin",
            "linkedin": "linkedin.com/in/dana",
            "website": "dana.dev",
        })
        lines = render_resume_document(resume).split("\n")
        assert lines[0] == "dana@example.com"
        assert lines[1] == "555-0100 | Berlin"
        assert lines[2] == "LinkedIn: linkedin.com/in/dana | Portfolio: dana.dev"
        assert "PROFESSIONAL SUMMARY" in lines
        assert "Technical Skills: Python, Kafka, PostgreSQL" in lines
        assert "Core Competencies: Mentoring" in lines
        assert not any(line.startswith("Certifications:") for line in lines)
        assert "Senior Engineer | Acme Pay | 2021 - Present" in lines
        assert "Location: Berlin" in lines
        assert "• Cut settlement latency by 40%" in lines
        assert "BSc | TU Munich | 2016" in lines
        assert "Field of Study: Computer Science" in lines

    def test_sections_in_order(self):
        doc = render_resume_document(_resume())
        positions = [doc.index(h) for h in ("PROFESSIONAL SUMMARY", "SKILLS", "PROFESSIONAL EXPERIENCE", "EDUCATION")]
        assert positions == sorted(positions)

    def test_flat_skills_and_string_entries(self):
        resume = ResumeData.model_validate({
            "contact": "Dana Lee, Berlin",
            "skills": ["Go", "Rust"],
            "education": ["BSc Computer Science, TU Munich"],
        })
        doc = render_resume_document(resume)
        assert doc.startswith("Dana Lee, Berlin\n")
        assert "SKILLS\nGo, Rust\n" in doc
        assert "EDUCATION\nBSc Computer Science, TU Munich\n" in doc
        assert "PROFESSIONAL SUMMARY" not in doc

    def test_structured_entries_render_by_label(self):
        resume = ResumeData.model_validate({
            "skills": {"technical": [{"name": "Python", "level": "expert"}, "Go"], "soft": [{"years": 4}]},
            "experience": [{"role": "Engineer", "company": "Acme", "achievements": [{"text": "Shipped v2"}]}],
        })
        doc = render_resume_document(resume)
        assert "Technical Skills: Python, Go" in doc
        assert "Core Competencies: 4" in doc
        assert "• Shipped v2" in doc
        assert _flat_skills(resume.skills) == ["Python", "Go", "4"]

    def test_deterministic(self):
        assert render_resume_document(_resume()) == render_resume_document(_resume())


class TestPdfRendering:
    def test_renders_pdf_bytes(self):
        pdf = render_resume_pdf(_resume(), job_description="Kafka & <Go> engineer")
        assert pdf.startswith(b"%PDF")
        assert len(pdf) > 1000

    def test_minimal_resume(self):
        pdf = render_resume_pdf(ResumeData.model_validate({"summary": "Short."}))
        assert pdf.startswith(b"%PDF")

    def test_date_range(self):
        exp = _resume(experience=[{"startDate": "01/2020", "isCurrentRole": True}]).experience[0]
        assert _date_range(exp) == "01/2020 - Present"
        exp = _resume(experience=[{"startDate": "01/2018", "endDate": "12/2019"}]).experience[0]
        assert _date_range(exp) == "01/2018 - 12/2019"
        exp = _resume(experience=[{"duration": "2019 - 2021"}]).experience[0]
        assert _date_range(exp) == "2019 - 2021"
        exp = _resume(experience=[{"company": "A"}]).experience[0]
        assert _date_range(exp) == "Start - End"

    def test_grouped_skills_flattened(self):
        assert _flat_skills(_resume().skills) == ["Python", "Kafka", "PostgreSQL", "Mentoring"]
        assert _flat_skills(None) == []


class TestGeneratePdfRoute:
    def test_returns_inline_pdf(self, client):
        resp = client.post("/api/resume/generate-pdf", json={
            "resumeData": copy.deepcopy(TAILORED_RESUME),
            "jobDescription": "Backend role",
        })
        assert resp.status_code == 200
        assert resp.headers["content-type"] == "application/pdf"
        assert resp.headers["content-disposition"] == "inline; filename=resume.pdf"
        assert resp.content.startswith(b"%PDF")

    def test_empty_body_is_400(self, client):
        resp = client.post("/api/resume/generate-pdf", content=b"", headers={"content-type": "application/json"})
        assert resp.status_code == 400
        assert resp.json() == {"error": "Empty request body"}

    def test_missing_resume_is_400(self, client):
        resp = client.post("/api/resume/generate-pdf", json={"jobDescription": "x"})
        assert resp.status_code == 400
        assert resp.json() == {"error": "No resume data provided"}

    def test_render_failure_is_500(self, client, monkeypatch):
        def boom(resume, job_description=None):
            raise RuntimeError("font missing")

        monkeypatch.setattr("interview_prep.api.resume.pdf.render_resume_pdf", boom)
        resp = client.post("/api/resume/generate-pdf", json={"resumeData": {"summary": "x"}})
        assert resp.status_code == 500
        assert resp.json() == {"error": "Failed to generate PDF", "details": "font missing"}
