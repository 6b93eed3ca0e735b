from filmcarbon import Category, CommercialTravelEntry, calculate_all, errors_frame, results_frame
from filmcarbon.reporting import ERROR_COLUMNS, RESULT_COLUMNS


def test_results_frame_flattens_classification(registry):
    output = calculate_all(Category.COMMERCIAL_TRAVEL, [
        CommercialTravelEntry("Flight", 1000),
        CommercialTravelEntry("Ferry", 10),
        CommercialTravelEntry("Hot air balloon", 3),
    ], registry)
    frame = results_frame(output)
    assert len(frame) == 2
    assert set(RESULT_COLUMNS) <= set(frame.columns)
    assert frame.loc[0, "classification.flight_classification"] == "Long"
    assert frame["co2e_kg"].sum() == output.totals.total_co2e

    errors = errors_frame(output)
    assert list(errors.columns) == ERROR_COLUMNS
    assert errors.loc[0, "kind"] == "FactorNotFound"


def test_empty_frames(registry):
    output = calculate_all(Category.HOTELS, [], registry)
    assert list(results_frame(output).columns) == RESULT_COLUMNS
    assert errors_frame(output).empty
