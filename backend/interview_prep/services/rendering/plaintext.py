from typing import List, Union

from ...schemas.resume import Contact, Education, Experience, ListItem, ResumeData, SkillGroups, item_labels


def _format_contact(contact: Union[Contact, str, None]) -> List[str]:
    if not contact:
        return []
    if isinstance(contact, str):
        return [contact, ""]

    lines = [contact.email or ""]
    lines.append(f"{contact.phone or ''} | {contact.location or ''}")

    links = []
    if contact.linkedin:
        links.append(f"LinkedIn: {contact.linkedin}")
    if contact.github:
        links.append(f"GitHub: {contact.github}")
    if contact.website:
        links.append(f"Portfolio: {contact.website}")
    if links:
        lines.append(" | ".join(links))
    lines.append("")
    return lines


def _format_skills(skills: Union[SkillGroups, List[ListItem], None]) -> List[str]:
    if not skills:
        return []
    lines = ["SKILLS"]
    if isinstance(skills, list):
        lines.append(", ".join(item_labels(skills)))
    else:
        if skills.technical:
            lines.append(f"Technical Skills: {', '.join(item_labels(skills.technical))}")
        if skills.soft:
            lines.append(f"Core Competencies: {', '.join(item_labels(skills.soft))}")
        if skills.certifications:
            lines.append(f"Certifications: {', '.join(item_labels(skills.certifications))}")
    lines.append("")
    return lines


def _format_experience(experience: List[Experience]) -> List[str]:
    if not experience:
        return []
    lines = ["PROFESSIONAL EXPERIENCE"]
    for exp in experience:
        lines.append(f"{exp.role or ''} | {exp.company or ''} | {exp.duration or ''}")
        if exp.location:
            lines.append(f"Location: {exp.location}")
        if exp.achievements:
            lines.append("Key Achievements:")
            lines.extend(f"• {item}" for item in item_labels(exp.achievements))
            lines.append("")
        if exp.responsibilities:
            lines.append("Responsibilities:")
            lines.extend(f"• {item}" for item in item_labels(exp.responsibilities))
            lines.append("")
        lines.append("")
    return lines


def _format_education(education: List[Union[Education, str]]) -> List[str]:
    if not education:
        return []
    lines = ["EDUCATION"]
    for edu in education:
        if isinstance(edu, str):
            lines.append(edu)
        else:
            lines.append(f"{edu.degree or ''} | {edu.institution or ''} | {edu.year or ''}")
            if edu.field:
                lines.append(f"Field of Study: {edu.field}")
            if edu.gpa:
                lines.append(f"GPA: {edu.gpa}")
            if edu.honors:
                lines.append(f"Honors: {edu.honors}")
        lines.append("")
    return lines


def render_resume_document(resume: ResumeData) -> str:
    """
    Flatten a structured resume into plain text. Deterministic: the same
    structure always yields the same document.
    """
    lines: List[str] = []
    lines.extend(_format_contact(resume.contact))
    if resume.summary:
        lines.extend(["PROFESSIONAL SUMMARY", resume.summary, ""])
    lines.extend(_format_skills(resume.skills))
    lines.extend(_format_experience(resume.experience))
    lines.extend(_format_education(resume.education))
    return "\n".join(lines)
