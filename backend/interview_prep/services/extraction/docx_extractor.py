import io
from typing import List

from docx import Document


def _paragraph_lines(doc: Document) -> List[str]:
    return [para.text.strip() for para in doc.paragraphs if para.text.strip()]


def _table_lines(doc: Document) -> List[str]:
    """
    Tables are read row by row; cells on one row are joined with " | " so
    multi-column layouts keep their grouping.
    """
    lines = []
    for table in doc.tables:
        for row in table.rows:
            cells = []
            for cell in row.cells:
                text = cell.text.strip()
                # Merged cells repeat the same text across the span
                if text and text not in cells:
                    cells.append(text)
            if cells:
                lines.append(" | ".join(cells))
    return lines


def extract(data: bytes) -> str:
    """
    Extract textual content from a DOCX file, paragraphs first, then tables.
    """
    doc = Document(io.BytesIO(data))
    return "\n".join(_paragraph_lines(doc) + _table_lines(doc))
