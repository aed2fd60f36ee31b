from typing import Optional

from ...errors import ValidationError
from ...utils.text import MIN_TEXT_LENGTH, clean_resume_text
from . import docx_extractor, pdf_extractor

PDF_TYPE = "application/pdf"
DOCX_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


def detect_kind(file_name: str, content_type: Optional[str]) -> Optional[str]:
    name = (file_name or "").lower()
    if content_type == PDF_TYPE or name.endswith(".pdf"):
        return "pdf"
    if content_type == DOCX_TYPE or name.endswith(".docx"):
        return "docx"
    return None


def extract_text(file_name: str, content_type: Optional[str], data: bytes) -> str:
    """
    Text of an uploaded resume, cleaned for the parser.

    Raises ValidationError for unsupported types, unreadable files and files
    with no usable text layer.
    """
    kind = detect_kind(file_name, content_type)
    if kind is None:
        raise ValidationError("Unsupported file type. Please upload PDF or DOCX files only.")

    label = kind.upper()
    try:
        raw = pdf_extractor.extract(data) if kind == "pdf" else docx_extractor.extract(data)
    except Exception as exc:
        raise ValidationError(f"Failed to process {label} file", details=str(exc)) from exc

    if len(raw.strip()) < MIN_TEXT_LENGTH:
        raise ValidationError(f"{label} appears to be empty or contains no extractable text")
    return clean_resume_text(raw)
