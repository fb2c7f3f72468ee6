"""Search keywords and expected price read from an .xlsx workbook.

The workbook holds headers on row 1 and the vector on row 2:
``A`` first keyword, ``B`` second keyword, ``C`` expected price. Values stay
strings; the price is normalised later when compared against the cart.
"""
from __future__ import annotations

import logging
import posixpath
import zipfile
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from storefront_e2e.core.errors import DataValidationError, ResourceNotFoundError

logger = logging.getLogger(__name__)

NS = {"x": "http://schemas.openxmlformats.org/spreadsheetml/2006/main"}
PKG_REL_NS = {"r": "http://schemas.openxmlformats.org/package/2006/relationships"}
DOC_REL_ID = "{http://schemas.openxmlformats.org/officeDocument/2006/relationships}id"

DATA_ROW = 2
COLUMNS = (("A", "FirstKeyword"), ("B", "SecondKeyword"), ("C", "ExpectedPrice"))


@dataclass(frozen=True)
class SearchVector:
    first_keyword: str
    second_keyword: str
    expected_price: str


def _col_letters(ref: str) -> str:
    return "".join(ch for ch in ref if ch.isalpha()).upper()


def _idx_to_col(index: int) -> str:
    letters = ""
    index += 1
    while index:
        index, rem = divmod(index - 1, 26)
        letters = chr(65 + rem) + letters
    return letters


def _read_shared_strings(z: zipfile.ZipFile) -> list[str]:
    if "xl/sharedStrings.xml" not in z.namelist():
        return []
    shared: list[str] = []
    root = ET.fromstring(z.read("xl/sharedStrings.xml"))
    for si in root.findall("x:si", NS):
        t = si.find("x:t", NS)
        if t is not None:
            shared.append(t.text or "")
        else:
            # rich text is split across runs
            shared.append("".join((rt.text or "") for rt in si.findall(".//x:t", NS)))
    return shared


def _resolve_sheet(z: zipfile.ZipFile, sheet_name: str) -> tuple[str, str]:
    """Return ``(name, archive path)`` of ``sheet_name``, or of the first sheet when absent."""
    workbook = ET.fromstring(z.read("xl/workbook.xml"))
    sheets = [
        (sheet.attrib.get("name", ""), sheet.attrib.get(DOC_REL_ID, ""))
        for sheet in workbook.findall("x:sheets/x:sheet", NS)
    ]
    if not sheets:
        raise DataValidationError("Workbook contains no worksheets")

    rels = ET.fromstring(z.read("xl/_rels/workbook.xml.rels"))
    targets = {rel.attrib.get("Id"): rel.attrib.get("Target", "") for rel in rels.findall("r:Relationship", PKG_REL_NS)}

    name, rel_id = next(((n, r) for n, r in sheets if n == sheet_name), sheets[0])
    if name != sheet_name:
        logger.info("Sheet '%s' not found; falling back to first worksheet '%s'", sheet_name, name)
    target = targets.get(rel_id)
    if not target:
        raise DataValidationError(f"Worksheet '{name}' has no relationship target")
    if target.startswith("/"):
        return name, target.lstrip("/")
    return name, posixpath.normpath(posixpath.join("xl", target))


def _cell_text(c: ET.Element, shared: list[str]) -> str:
    t = c.attrib.get("t")
    if t == "s":
        v = c.find("x:v", NS)
        if v is None:
            return ""
        try:
            return shared[int(v.text or "0")]
        except (ValueError, IndexError) as exc:
            raise DataValidationError(f"Cell {c.attrib.get('r', '?')} points at a missing shared string") from exc
    if t == "inlineStr":
        it = c.find(".//x:t", NS)
        return (it.text or "") if it is not None else ""
    v = c.find("x:v", NS)
    return (v.text or "") if v is not None else ""


def _read_row(z: zipfile.ZipFile, sheet_path: str, row_number: int, shared: list[str]) -> dict[str, str]:
    root = ET.fromstring(z.read(sheet_path))
    row: Optional[ET.Element] = None
    for position, candidate in enumerate(root.findall("x:sheetData/x:row", NS), start=1):
        if int(candidate.attrib.get("r", position)) == row_number:
            row = candidate
            break
    if row is None:
        return {}
    cells: dict[str, str] = {}
    for position, c in enumerate(row.findall("x:c", NS)):
        ref = c.attrib.get("r")
        column = _col_letters(ref) if ref else _idx_to_col(position)
        cells[column] = _cell_text(c, shared)
    return cells


def read_search_vector(path: Path | str, sheet_name: str = "Sheet1") -> SearchVector:
    """Read the search vector from row 2 of ``sheet_name``.

    Raises :class:`ResourceNotFoundError` when the workbook is missing and
    :class:`DataValidationError` when it is unreadable or a cell is blank.
    """
    path = Path(path)
    if not path.is_file():
        raise ResourceNotFoundError(f"Excel file not found: {path.resolve()}")

    try:
        with zipfile.ZipFile(path) as z:
            shared = _read_shared_strings(z)
            resolved_name, sheet_path = _resolve_sheet(z, sheet_name)
            cells = _read_row(z, sheet_path, DATA_ROW, shared)
    except (zipfile.BadZipFile, KeyError, ET.ParseError) as exc:
        raise DataValidationError(f"{path} is not a readable .xlsx workbook: {exc}") from exc

    values: list[str] = []
    for column, logical_name in COLUMNS:
        value = cells.get(column, "").strip()
        if not value:
            raise DataValidationError(
                f"Cell for '{logical_name}' ({column}{DATA_ROW}) is empty in sheet '{resolved_name}'."
            )
        values.append(value)

    vector = SearchVector(*values)
    logger.info("Loaded search vector from %s (sheet '%s')", path, resolved_name)
    return vector
