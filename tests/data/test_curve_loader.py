# tests/data/test_curve_loader.py
import pytest

from treasury_curve.data.ingestion.treasury import TreasuryCsvIngestor, load_curve
from treasury_curve.fixed_income.maturities import MaturityCatalog
from treasury_curve.fixed_income.validation import NoMatchingDate
from treasury_curve.reporting.exporter import build_snapshot, snapshot_to_dict

HEADER = ["DATE", "1MO", "3MO", "6MO", "1Y", "2Y", "3Y", "5Y", "7Y", "10Y", "20Y", "30Y"]
ROW_0916 = ["2025-09-16", "4.25", "4.02", "3.85", "3.65", "3.52", "3.50", "3.62", "3.80", "4.06", "4.65", "4.70"]
ROW_0917 = ["2025-09-17", "4.20", "4.00", "3.80", "3.60", "3.51", "3.48", "3.60", "3.78", "4.05", "4.62", "4.68"]


def as_csv(rows):
    return "\n".join(",".join(r) for r in rows) + "\n"


def yields_of(result):
    return [o.yield_percent for o in result.curve.observations]


def test_unfiltered_load_takes_last_row():
    result = load_curve([HEADER, ROW_0916, ROW_0917])
    assert result.found
    assert result.curve.date == "2025-09-17"
    assert len(result.curve) == 11
    assert yields_of(result) == [float(v) for v in ROW_0917[1:]]


def test_filtered_load_exact_date():
    result = load_curve([HEADER, ROW_0916, ROW_0917], date_filter="2025-09-16")
    assert result.found
    assert result.curve.date == "2025-09-16"
    assert yields_of(result) == [float(v) for v in ROW_0916[1:]]
    assert result.curve.get_spread(2.0, 10.0) == pytest.approx(0.54)


def test_prefix_filter_takes_first_match():
    result = load_curve([HEADER, ROW_0916, ROW_0917], date_filter="2025-09")
    assert result.curve.date == "2025-09-16"


def test_observations_sorted_and_labelled():
    result = load_curve([HEADER, ROW_0917])
    maturities = [o.maturity_years for o in result.curve.observations]
    assert maturities == sorted(maturities)
    assert result.curve.observations[0].label == "1MO"
    assert result.curve.observations[-1].label == "30Y"


def test_no_matching_date():
    result = load_curve([HEADER, ROW_0916, ROW_0917], date_filter="2024-01-02")
    assert not result.found
    assert result.curve.is_empty
    assert result.curve.date == ""
    assert result.date_filter == "2024-01-02"
    assert result.curve.get_yield(10.0) == 0.0
    with pytest.raises(NoMatchingDate, match="2024-01-02"):
        result.raise_if_missing()


def test_failed_load_snapshot_has_no_date():
    result = load_curve([HEADER, ROW_0916], date_filter="1999")
    assert snapshot_to_dict(build_snapshot(result.curve))["date"] == ""


def test_same_date_rows_overwrite_when_unfiltered():
    revised = ["2025-09-17", "5.00", "5.10"]
    result = load_curve([HEADER, ROW_0916, ROW_0917, revised])
    assert result.curve.date == "2025-09-17"
    assert [o.label for o in result.curve.observations] == ["1MO", "3MO"]
    assert yields_of(result) == [5.00, 5.10]


def test_header_only_table():
    result = load_curve([HEADER])
    assert not result.found
    assert result.rows_scanned == 0


def test_partial_row_keeps_leading_maturities():
    short_row = ["2025-09-18", "4.10", "4.00", "3.90", "3.70"]
    result = load_curve([HEADER, ROW_0917, short_row])
    assert result.found
    assert result.curve.date == "2025-09-18"
    assert [o.label for o in result.curve.observations] == ["1MO", "3MO", "6MO", "1Y"]


def test_strict_mode_skips_partial_row():
    short_row = ["2025-09-18", "4.10", "4.00", "3.90", "3.70"]
    result = load_curve([HEADER, ROW_0917, short_row], strict=True)
    assert result.curve.date == "2025-09-17"
    assert result.rows_skipped == 1


def test_row_without_values_is_skipped(caplog):
    result = load_curve([HEADER, ROW_0916, ["2025-09-19"]])
    assert result.curve.date == "2025-09-16"
    assert result.rows_skipped == 1
    assert "Skipping row 3" in caplog.text


def test_unparsable_cell_skips_only_that_maturity(caplog):
    row = list(ROW_0917)
    row[2] = "N/A"  # 3MO
    row[5] = "nan"  # 2Y
    result = load_curve([HEADER, row])
    labels = [o.label for o in result.curve.observations]
    assert "3MO" not in labels and "2Y" not in labels
    assert len(labels) == 9
    assert result.cells_skipped == 2
    assert "could not be parsed" in caplog.text


def test_empty_cells_skipped():
    row = ["2025-09-17", "", "4.00", " ", "3.60"]
    result = load_curve([HEADER, row])
    assert [o.label for o in result.curve.observations] == ["3MO", "1Y"]


def test_all_bad_cells_do_not_count_as_match():
    bad = ["2025-09-18"] + ["ND"] * 11
    unfiltered = load_curve([HEADER, ROW_0916, bad])
    assert unfiltered.found
    assert unfiltered.curve.date == "2025-09-16"

    filtered = load_curve([HEADER, ROW_0916, bad], date_filter="2025-09-18")
    assert not filtered.found


def test_blank_lines_and_whitespace_tolerated():
    padded = [f" {v} " for v in ROW_0916]
    result = load_curve([HEADER, [], [""], padded])
    assert result.curve.date == "2025-09-16"
    assert result.curve.get_yield(10.0) == 4.06


def test_extra_columns_ignored():
    result = load_curve([HEADER, ROW_0917 + ["9.99", "extra"]])
    assert len(result.curve) == 11
    assert result.curve.get_yield(30.0) == 4.68


def test_custom_catalog():
    catalog = MaturityCatalog(entries=(("2Y", 2.0), ("10Y", 10.0)))
    result = load_curve([["DATE", "2Y", "10Y"], ["2025-09-17", "3.5", "4.0"]], catalog=catalog)
    assert [o.label for o in result.curve.observations] == ["2Y", "10Y"]


def test_load_is_idempotent():
    rows = [HEADER, ROW_0916, ROW_0917]
    first = load_curve(rows, date_filter="2025-09-16")
    second = load_curve(rows, date_filter="2025-09-16")
    assert first.curve.observations == second.curve.observations


# ------------------------------------------------------------
# CSV ingestor
# ------------------------------------------------------------
def test_ingestor_reads_csv(tmp_path):
    path = tmp_path / "rates.csv"
    path.write_text(as_csv([HEADER, ROW_0916, ROW_0917]))

    result = TreasuryCsvIngestor(path).run()
    assert result.found
    assert result.curve.date == "2025-09-17"

    result = TreasuryCsvIngestor(str(path), date_filter="2025-09-16").run()
    assert result.curve.get_yield(2.0) == 3.52


def test_ingestor_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        TreasuryCsvIngestor(tmp_path / "missing.csv").run()
