import re

MIN_TEXT_LENGTH = 10

_NON_PRINTABLE = re.compile(r"[^\x20-\x7E\n]")
_CONTROL_CHARS = re.compile(r"[\x00-\x1F\x7F-\x9F]")
_BLANK_RUNS = re.compile(r"\n{3,}")
_SPACE_RUNS = re.compile(r"[ \t]+")


def clean_resume_text(text: str) -> str:
    """
    Normalise extracted resume text: unix line endings, ASCII only, single
    spaces, no padding around line breaks and at most one blank line in a row.
    """
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = text.replace("\t", " ")
    text = _NON_PRINTABLE.sub(" ", text)
    text = _SPACE_RUNS.sub(" ", text)
    text = "\n".join(line.strip() for line in text.split("\n"))
    text = _BLANK_RUNS.sub("\n\n", text)
    return text.strip()


def strip_control_chars(text: str) -> str:
    return _CONTROL_CHARS.sub(" ", text).strip()
