import io
from pathlib import Path
from typing import Iterator, Union

import structlog
from docx import Document
from docx.document import Document as DocumentObject
from docx.oxml.ns import qn
from docx.table import Table, _Cell
from docx.text.paragraph import Paragraph

logger = structlog.get_logger(__name__)


def extract_text_from_stream(file_stream: io.BytesIO, filename: str = "document.docx") -> str:
    """
    Extracts the plain text of a DOCX stream: body paragraphs and tables in
    document order, blocks separated by blank lines, table cells by " | ".
    """
    try:
        # Ensure stream is at start
        file_stream.seek(0)
        doc = Document(file_stream)
        return _extract_blocks(doc)

    except Exception as e:
        logger.error(f"Text extraction failed for {filename}: {e}", exc_info=True)
        raise ValueError(f"Could not extract text: {str(e)}") from e


def read_document(path: Path) -> str:
    """Reads a .docx through python-docx and anything else as UTF-8 text."""
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    if path.suffix.lower() == ".docx":
        with open(path, "rb") as f:
            return extract_text_from_stream(io.BytesIO(f.read()), filename=path.name)

    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def iter_block_items(parent) -> Iterator[Union[Paragraph, Table]]:
    """
    Yields Paragraph or Table objects in the order they appear in the XML.
    """
    if isinstance(parent, DocumentObject):
        parent_elm = parent.element.body
    elif isinstance(parent, _Cell):
        parent_elm = parent._tc
    else:
        raise ValueError(f"Unsupported parent type for iteration: {type(parent)}")

    for child in parent_elm.iterchildren():
        if child.tag == qn("w:p"):
            yield Paragraph(child, parent)
        elif child.tag == qn("w:tbl"):
            yield Table(child, parent)


def _extract_blocks(container) -> str:
    blocks = []
    for item in iter_block_items(container):
        if isinstance(item, Paragraph):
            blocks.append(item.text)
        elif isinstance(item, Table):
            table_text = _extract_table(item)
            if table_text:
                blocks.append(table_text)
    return "\n\n".join(blocks)


def _extract_table(table: Table) -> str:
    rows_text = []
    for row in table.rows:
        cells = []
        # A horizontally merged cell is yielded once per grid column it spans
        seen_cells = set()

        for cell in row.cells:
            if cell._tc in seen_cells:
                continue
            seen_cells.add(cell._tc)
            cells.append(_extract_blocks(cell).replace("\n\n", " "))

        if any(c.strip() for c in cells):
            rows_text.append(" | ".join(cells))
    return "\n".join(rows_text)
