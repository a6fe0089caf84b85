"""Plain-text course material loader."""

import logging
import re
from pathlib import Path

import chardet

from coursequiz.models.document import SourceDocument

logger = logging.getLogger(__name__)

# Supported file extensions mapped to format identifiers
SUPPORTED_FORMATS: dict[str, str] = {
    ".txt": "txt",
    ".text": "txt",
    ".md": "md",
    ".markdown": "md",
}

_MAX_TITLE_LENGTH = 100


class DocumentLoader:
    """Loads instructional text files into SourceDocument objects.

    Only plain text and Markdown are supported.
    """

    def load(self, file_path: str | Path) -> SourceDocument:
        """Read a text file into a SourceDocument.

        Args:
            file_path: Path to the text file.

        Returns:
            A SourceDocument containing the text and a best-guess title.

        Raises:
            FileNotFoundError: If file_path does not exist.
            ValueError: If the file format is not supported.
        """
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        file_format = self._detect_format(path)
        text = self._read_text(path)

        return SourceDocument(
            title=self._extract_title(text, path),
            text=text,
            source_path=str(path),
            file_format=file_format,
        )

    def _detect_format(self, file_path: Path) -> str:
        ext = file_path.suffix.lower()
        if ext not in SUPPORTED_FORMATS:
            raise ValueError(
                f"Unsupported file format: '{ext}'. "
                f"Supported: {', '.join(SUPPORTED_FORMATS.keys())}"
            )
        return SUPPORTED_FORMATS[ext]

    def _read_text(self, file_path: Path) -> str:
        """Read a text file with encoding detection.

        Tries UTF-8 first, then uses chardet for fallback detection.

        Args:
            file_path: Path to the text file.

        Returns:
            The file content as a string.
        """
        try:
            return file_path.read_text(encoding="utf-8")
        except UnicodeDecodeError:
            pass

        raw_bytes = file_path.read_bytes()
        detected = chardet.detect(raw_bytes)
        encoding = detected.get("encoding") or "utf-8"
        confidence = detected.get("confidence") or 0

        if confidence < 0.7:
            logger.warning(
                "Low confidence encoding detection for %s: %s (%.0f%%)",
                file_path,
                encoding,
                confidence * 100,
            )

        try:
            return raw_bytes.decode(encoding)
        except (UnicodeDecodeError, LookupError):
            logger.error("Failed to decode %s as %s, replacing bad bytes", file_path, encoding)
            return raw_bytes.decode("utf-8", errors="replace")

    def _extract_title(self, text: str, file_path: Path) -> str:
        """Use the first short heading-like line as title, else the file stem."""
        for line in text.strip().splitlines()[:5]:
            stripped = line.strip().lstrip("#").strip()
            if stripped and len(stripped) <= _MAX_TITLE_LENGTH:
                letters = len(re.findall(r"[^\W\d_]", stripped))
                if letters / len(stripped) > 0.5:
                    return stripped

        return file_path.stem
