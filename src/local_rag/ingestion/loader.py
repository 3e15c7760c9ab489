"""Document loaders — turn a file on disk into one plain-text string."""

from __future__ import annotations

import logging
import subprocess
import tempfile
from pathlib import Path

from langchain_community.document_loaders import PyPDFLoader, TextLoader

from local_rag.config import Settings, settings as default_settings
from local_rag.exceptions import DocumentConversionError

logger = logging.getLogger(__name__)


def _valid_utf8(data: bytes) -> str:
    """Decode *data*, dropping invalid byte sequences."""
    return data.decode("utf-8", errors="ignore")


def pdftotext(path: str | Path, binary: str = "pdftotext") -> str:
    """Convert a PDF with the external ``pdftotext`` tool (xpdf / poppler)."""
    with tempfile.TemporaryDirectory(prefix="vdb") as tmpdir:
        output = Path(tmpdir) / "output.txt"
        try:
            subprocess.run(
                [binary, str(path), str(output)],
                capture_output=True,
                check=True,
            )
        except (OSError, subprocess.CalledProcessError) as exc:
            stderr = getattr(exc, "stderr", b"") or b""
            raise DocumentConversionError(
                f"{binary} failed on {path}: {exc} {_valid_utf8(stderr).strip()}".rstrip()
            ) from exc

        try:
            return _valid_utf8(output.read_bytes())
        except OSError as exc:
            raise DocumentConversionError(f"Cannot read text extracted from {path}: {exc}") from exc


def pypdf_text(path: str | Path) -> str:
    """Extract PDF text in-process via LangChain's ``PyPDFLoader``."""
    try:
        pages = PyPDFLoader(str(path)).load()
    except Exception as exc:
        raise DocumentConversionError(f"Cannot parse PDF {path}: {exc}") from exc
    return "\n\n".join(page.page_content for page in pages)


def load_document_text(path: str | Path, settings: Settings = default_settings) -> str:
    """Return the text of the document at *path*.

    PDFs go through the extractor selected by ``settings.pdf_extractor``;
    every other file is read as UTF-8 text.
    """
    path = Path(path)
    if not path.is_file():
        raise DocumentConversionError(f"No such document: {path}")

    if path.suffix.lower() == ".pdf":
        logger.info("Converting %s with %s", path, settings.pdf_extractor)
        if settings.pdf_extractor == "pypdf":
            return pypdf_text(path)
        return pdftotext(path, binary=settings.pdftotext_bin)

    try:
        docs = TextLoader(str(path), encoding="utf-8").load()
    except Exception as exc:
        raise DocumentConversionError(f"Cannot read {path}: {exc}") from exc
    return "\n\n".join(doc.page_content for doc in docs)
