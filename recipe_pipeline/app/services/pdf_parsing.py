"""Plain-text extraction from PDF documents."""

import asyncio
import logging
from io import BytesIO

from pypdf import PdfReader
from pypdf.errors import PyPdfError

from recipe_pipeline.app.core.errors import ExtractError, NoTextFoundError

logger = logging.getLogger(__name__)


def extract_pdf_text(data: bytes) -> str:
    """Concatenate the text of every readable page, in page order.

    Pages that fail to extract or carry no text are skipped.
    """
    if not data:
        raise ExtractError("empty PDF payload")
    try:
        reader = PdfReader(BytesIO(data))
        pages = list(reader.pages)
    except (PyPdfError, ValueError, OSError) as exc:
        raise ExtractError(f"unable to read PDF: {exc}") from exc
    except Exception as exc:  # noqa: BLE001
        logger.debug("Malformed PDF structure: %r", exc)
        raise ExtractError(f"malformed PDF: {exc!r}") from exc

    chunks = []
    for idx, page in enumerate(pages):
        try:
            text = page.extract_text() or ""
        except Exception as exc:  # noqa: BLE001
            logger.debug("Skipping PDF page %d: %s", idx + 1, exc)
            continue
        if text.strip():
            chunks.append(text)

    content = "".join(chunks).strip()
    if not content:
        raise NoTextFoundError()
    logger.debug("Extracted %d characters from %d PDF pages", len(content), len(pages))
    return content


async def extract_pdf_text_async(data: bytes) -> str:
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, extract_pdf_text, data)
