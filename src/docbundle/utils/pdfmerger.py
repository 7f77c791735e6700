"""
docbundle.utils.pdfmerger

Page-level PDF concatenation on top of pypdf, working on in-memory bytes.
"""

from io import BytesIO

from pypdf import PdfReader, PdfWriter


def append_pdf(writer: PdfWriter, data: bytes) -> int:
    """
    Appends every page of the PDF in `data` to `writer`, in original order.
    Returns the number of pages added.

    All or nothing: if any page fails, the pages already added from `data`
    are removed again before the error propagates.
    """
    reader = PdfReader(BytesIO(data))
    pages = list(reader.pages)
    start = len(writer.pages)
    try:
        for page in pages:
            writer.add_page(page)
    except Exception:
        _truncate(writer, start)
        raise
    return len(pages)


def _truncate(writer: PdfWriter, length: int) -> None:
    for index in range(len(writer.pages) - 1, length - 1, -1):
        del writer.pages[index]


def write_pdf(writer: PdfWriter) -> bytes:
    """
    Serializes `writer` to bytes.
    """
    buffer = BytesIO()
    try:
        writer.write(buffer)
        return buffer.getvalue()
    finally:
        buffer.close()
