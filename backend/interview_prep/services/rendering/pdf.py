import html
import io
from typing import Dict, List, Optional

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import HRFlowable, Paragraph, SimpleDocTemplate, Spacer

from ...schemas.resume import Contact, Experience, ResumeData, SkillGroups, item_labels


def build_pdf_styles() -> Dict[str, ParagraphStyle]:
    sample = getSampleStyleSheet()
    return {
        "name": ParagraphStyle(
            "name", parent=sample["Normal"], fontName="Helvetica-Bold",
            fontSize=18, leading=22, spaceAfter=4,
        ),
        "contact": ParagraphStyle(
            "contact", parent=sample["Normal"], fontName="Helvetica",
            fontSize=10, leading=13, textColor=colors.HexColor("#444444"),
        ),
        "section": ParagraphStyle(
            "section", parent=sample["Normal"], fontName="Helvetica-Bold",
            fontSize=12, leading=15, spaceBefore=8, spaceAfter=3,
        ),
        "heading": ParagraphStyle(
            "heading", parent=sample["Normal"], fontName="Helvetica-Bold",
            fontSize=11, leading=14, spaceBefore=4,
        ),
        "body": ParagraphStyle(
            "body", parent=sample["Normal"], fontName="Helvetica",
            fontSize=11, leading=14,
        ),
        "small": ParagraphStyle(
            "small", parent=sample["Normal"], fontName="Helvetica",
            fontSize=10, leading=13,
        ),
        "small_bold": ParagraphStyle(
            "small_bold", parent=sample["Normal"], fontName="Helvetica-Bold",
            fontSize=10, leading=13,
        ),
        "job": ParagraphStyle(
            "job", parent=sample["Normal"], fontName="Helvetica",
            fontSize=9, leading=12,
        ),
    }


def _p(text: str, style: ParagraphStyle) -> Paragraph:
    return Paragraph(html.escape(text).replace("\n", "<br/>"), style)


def _flat_skills(skills) -> List[str]:
    if not skills:
        return []
    if isinstance(skills, SkillGroups):
        return item_labels(skills.technical + skills.soft + skills.certifications)
    return item_labels(skills)


def _date_range(exp: Experience) -> str:
    if not exp.start_date and not exp.end_date and exp.duration:
        return exp.duration
    end = "Present" if exp.is_current_role else (exp.end_date or "End")
    return f"{exp.start_date or 'Start'} - {end}"


def _contact_story(contact: Optional[Contact], styles) -> List:
    story: List = []
    if contact is None:
        return story
    if contact.name:
        story.append(_p(contact.name, styles["name"]))
    info = " | ".join(filter(None, [contact.email, contact.phone, contact.location]))
    if info:
        story.append(_p(info, styles["contact"]))
    links = " | ".join(filter(None, [contact.linkedin, contact.github, contact.website]))
    if links:
        story.append(_p(links, styles["contact"]))
    story.append(Spacer(1, 4 * mm))
    return story


def _experience_story(experience: List[Experience], styles) -> List:
    story: List = [_p("PROFESSIONAL EXPERIENCE", styles["section"])]
    for index, exp in enumerate(experience):
        story.append(_p(f"{exp.role or ''} at {exp.company or ''}", styles["heading"]))
        location = f" | {exp.location}" if exp.location else ""
        story.append(_p(f"{_date_range(exp)}{location}", styles["small"]))
        if exp.description:
            story.append(_p(exp.description, styles["small"]))
        for achievement in item_labels(exp.achievements):
            story.append(_p(f"• {achievement}", styles["small"]))
        # Skip responsibilities that only repeat the achievements
        if exp.responsibilities and exp.responsibilities != exp.achievements:
            for responsibility in item_labels(exp.responsibilities):
                story.append(_p(f"• {responsibility}", styles["small"]))
        if index < len(experience) - 1:
            story.append(Spacer(1, 3 * mm))
    return story


def _education_story(resume: ResumeData, styles) -> List:
    story: List = [_p("EDUCATION", styles["section"])]
    for index, edu in enumerate(resume.education):
        if isinstance(edu, str):
            story.append(_p(edu, styles["small"]))
        else:
            degree = f"{edu.degree or ''}{f' in {edu.field}' if edu.field else ''}"
            story.append(_p(degree, styles["heading"]))
            story.append(_p(edu.institution or "", styles["small"]))
            if edu.year:
                story.append(_p(f"Graduated: {edu.year}", styles["small"]))
            if edu.gpa:
                story.append(_p(f"GPA: {edu.gpa}", styles["small"]))
            if edu.honors:
                story.append(_p(f"Honors: {edu.honors}", styles["small"]))
        if index < len(resume.education) - 1:
            story.append(Spacer(1, 3 * mm))
    return story


def render_resume_pdf(resume: ResumeData, job_description: Optional[str] = None) -> bytes:
    """
    Lay out a resume as a single-column A4 PDF and return its bytes.
    """
    styles = build_pdf_styles()
    output = io.BytesIO()
    doc = SimpleDocTemplate(
        output,
        pagesize=A4,
        leftMargin=20 * mm,
        rightMargin=20 * mm,
        topMargin=20 * mm,
        bottomMargin=20 * mm,
        title="Resume",
    )

    story: List = []
    contact = resume.contact if isinstance(resume.contact, Contact) else None
    story.extend(_contact_story(contact, styles))
    if isinstance(resume.contact, str):
        story.append(_p(resume.contact, styles["contact"]))

    if job_description and job_description.strip():
        story.append(_p("TARGET JOB DESCRIPTION", styles["section"]))
        story.append(_p(job_description.strip(), styles["job"]))
        story.append(HRFlowable(width="100%", thickness=0.5, color=colors.black, spaceBefore=4, spaceAfter=8))

    if resume.summary:
        story.append(_p("PROFESSIONAL SUMMARY", styles["section"]))
        story.append(_p(resume.summary, styles["body"]))

    skills = _flat_skills(resume.skills)
    if skills:
        story.append(_p("TECHNICAL SKILLS", styles["section"]))
        story.append(_p(" • ".join(skills), styles["body"]))

    if resume.experience:
        story.extend(_experience_story(resume.experience, styles))

    if resume.education:
        story.extend(_education_story(resume, styles))

    if resume.ats_score or resume.ats_recommendations:
        story.append(Spacer(1, 6 * mm))
        story.append(_p("ATS ANALYSIS", styles["section"]))
        if resume.ats_score:
            story.append(_p(f"ATS Score: {resume.ats_score}", styles["small_bold"]))
        if resume.ats_recommendations:
            story.append(_p("Recommendations:", styles["small_bold"]))
            for rec in item_labels(resume.ats_recommendations):
                story.append(_p(f"• {rec}", styles["small"]))

    if not story:
        story.append(Spacer(1, 1))
    doc.build(story)
    return output.getvalue()
