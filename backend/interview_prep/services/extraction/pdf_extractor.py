import io
import logging

import pdfplumber

logger = logging.getLogger(__name__)


def extract(data: bytes) -> str:
    """
    Pull the text layer out of every page of a PDF, page by page.
    Pages that fail to parse are skipped.
    """
    pages = []
    with pdfplumber.open(io.BytesIO(data)) as pdf:
        for page_num, page in enumerate(pdf.pages, 1):
            try:
                text = page.extract_text() or ""
            except Exception as e:
                logger.warning("pdfplumber failed to process page %d: %s", page_num, e)
                continue
            if text.strip():
                pages.append(text)
        logger.info("Extracted text from %d of %d pages", len(pages), len(pdf.pages))
    return "\n".join(pages)
