# src/treasury_curve/data/ingestion/treasury.py
from __future__ import annotations

import csv
import logging
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from treasury_curve.data.ingestion.base import BaseIngestor
from treasury_curve.fixed_income.maturities import TREASURY_CATALOG, MaturityCatalog
from treasury_curve.fixed_income.schemas import YieldObservation
from treasury_curve.fixed_income.validation import (
    MalformedRow,
    NoMatchingDate,
    UnparsableCell,
)
from treasury_curve.fixed_income.yield_curve import YieldCurve

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoadResult:
    """
    Outcome of a curve load.

    ``found`` is True when a row matched the date selection and at least one
    of its yield cells parsed; ``curve`` is empty otherwise.
    """

    found: bool
    curve: YieldCurve = field(default_factory=YieldCurve)
    rows_scanned: int = 0
    rows_skipped: int = 0
    cells_skipped: int = 0
    date_filter: Optional[str] = None

    def raise_if_missing(self) -> None:
        if not self.found:
            raise NoMatchingDate(_no_match_message(self.date_filter))


def _no_match_message(date_filter: Optional[str]) -> str:
    if date_filter:
        return f"no usable row for date filter {date_filter!r}"
    return "no usable data rows"


@dataclass(frozen=True)
class _ParsedRow:
    date: str
    observations: Tuple[YieldObservation, ...]
    cells_skipped: int


# ------------------------------------------------------------
# Cell / row parsing
# ------------------------------------------------------------
def _parse_cell(text: str) -> float:
    value = text.strip()
    try:
        number = float(value)
    except ValueError as e:
        raise UnparsableCell(f"not a number: {value!r}") from e
    if not math.isfinite(number):
        raise UnparsableCell(f"not finite: {value!r}")
    return number


def _parse_row(
    fields: Sequence[str], catalog: MaturityCatalog, min_fields: int
) -> _ParsedRow:
    if len(fields) < min_fields:
        raise MalformedRow(f"expected at least {min_fields} fields, got {len(fields)}")

    date = fields[0].strip()
    if not date:
        raise MalformedRow("missing date field")

    observations = []
    skipped = 0
    # trailing columns beyond the catalog are ignored by zip
    for (label, years), cell in zip(catalog.entries, fields[1:]):
        try:
            value = _parse_cell(cell)
        except UnparsableCell as e:
            LOGGER.debug("%s %s skipped: %s", date, label, e)
            skipped += 1
            continue
        observations.append(
            YieldObservation(maturity_years=years, yield_percent=value, label=label)
        )

    return _ParsedRow(date=date, observations=tuple(observations), cells_skipped=skipped)


def _is_blank(fields: Sequence[str]) -> bool:
    return all(not f.strip() for f in fields)


# ------------------------------------------------------------
# Curve loading
# ------------------------------------------------------------
def load_curve(
    rows: Sequence[Sequence[str]],
    date_filter: Optional[str] = None,
    catalog: MaturityCatalog = TREASURY_CATALOG,
    strict: bool = False,
) -> LoadResult:
    """
    Build a YieldCurve from pre-split tabular rows.

    rows[0] is a header and is ignored; each later row is
    ``date, v_1, ..., v_k`` in the catalog's canonical order.

    Date selection:
        - date_filter given: first row whose date starts with the filter
        - no filter: last row in the table

    Rows that are too short are skipped; unparsable cells are skipped one at a
    time so partial rows still contribute. A row with no parsable yields does
    not count as a match. ``strict`` requires every catalog column to be
    present, as older releases did.
    """
    date_filter = date_filter or None
    min_fields = 1 + len(catalog) if strict else 2

    selected: Optional[_ParsedRow] = None
    scanned = 0
    rows_skipped = 0

    for line_no, fields in enumerate(rows[1:], start=2):
        if _is_blank(fields):
            continue
        scanned += 1

        if date_filter is not None and not fields[0].strip().startswith(date_filter):
            continue

        try:
            parsed = _parse_row(fields, catalog, min_fields)
        except MalformedRow as e:
            LOGGER.warning("Skipping row %d: %s", line_no, e)
            rows_skipped += 1
            continue

        if not parsed.observations:
            LOGGER.warning("Skipping row %d (%s): no parsable yields", line_no, parsed.date)
            rows_skipped += 1
            continue

        # each usable row replaces the previous candidate
        selected = parsed
        if date_filter is not None:
            break

    if selected is None:
        LOGGER.warning("Curve load failed: %s", _no_match_message(date_filter))
        return LoadResult(
            found=False,
            curve=YieldCurve(),
            rows_scanned=scanned,
            rows_skipped=rows_skipped,
            date_filter=date_filter,
        )

    if selected.cells_skipped:
        LOGGER.warning(
            "%s: %d yield cell(s) could not be parsed and were skipped",
            selected.date,
            selected.cells_skipped,
        )

    curve = YieldCurve(date=selected.date, observations=selected.observations)
    LOGGER.info("Loaded curve %s with %d points", curve.date, len(curve))
    return LoadResult(
        found=True,
        curve=curve,
        rows_scanned=scanned,
        rows_skipped=rows_skipped,
        cells_skipped=selected.cells_skipped,
        date_filter=date_filter,
    )


# ------------------------------------------------------------
# CSV file ingestion
# ------------------------------------------------------------
class TreasuryCsvIngestor(BaseIngestor):
    """
    Reads a Treasury rate release CSV and loads the curve for one date.
    """

    def __init__(
        self,
        source: str | Path,
        date_filter: Optional[str] = None,
        catalog: MaturityCatalog = TREASURY_CATALOG,
        strict: bool = False,
    ):
        self.source = Path(source)
        self.date_filter = date_filter
        self.catalog = catalog
        self.strict = strict

    def fetch_data(self) -> List[List[str]]:
        if not self.source.exists():
            raise FileNotFoundError(f"Rate data file does not exist: {self.source}")
        with self.source.open(newline="", encoding="utf-8") as f:
            return [row for row in csv.reader(f)]

    def transform(self, raw_rows: List[List[str]]) -> LoadResult:
        return load_curve(
            raw_rows,
            date_filter=self.date_filter,
            catalog=self.catalog,
            strict=self.strict,
        )
