import pytest

from runsplits.analysis.heart_rate import REST_ZONE, HeartRateAnalysis


def test_zone_boundaries():
    hr = HeartRateAnalysis(max_heart_rate=200)
    assert hr.zone_for(90) == REST_ZONE
    assert hr.zone_for(100) == "Z1"
    assert hr.zone_for(139) == "Z2"
    assert hr.zone_for(140) == "Z3"
    assert hr.zone_for(179) == "Z4"
    assert hr.zone_for(180) == "Z5"
    assert hr.zone_for(210) == "Z5"


def test_no_zones_without_max_heart_rate():
    hr = HeartRateAnalysis()
    hr.add_heart_rate(150, 10.0)

    assert hr.zone_for(150) is None
    assert hr.zone_percentages is None
    assert hr.average_heart_rate == 150


def test_time_weighted_average_and_percentages():
    hr = HeartRateAnalysis(max_heart_rate=200)
    hr.add_heart_rate(120, 30.0)
    hr.add_heart_rate(180, 10.0)

    assert hr.total_time_s == pytest.approx(40.0)
    assert hr.average_heart_rate == pytest.approx(135.0)
    pct = hr.zone_percentages
    assert pct["Z2"] == pytest.approx(75.0)
    assert pct["Z5"] == pytest.approx(25.0)
    assert pct[REST_ZONE] == 0.0


def test_zero_duration_readings_fall_back_to_plain_mean():
    hr = HeartRateAnalysis()
    hr.add_heart_rate(100, 0.0)
    hr.add_heart_rate(140, 0.0)
    assert hr.average_heart_rate == 120


def test_empty_analysis_has_no_average():
    assert HeartRateAnalysis(max_heart_rate=190).average_heart_rate is None


def test_invalid_inputs():
    with pytest.raises(ValueError):
        HeartRateAnalysis(max_heart_rate=0)
    with pytest.raises(ValueError):
        HeartRateAnalysis().add_heart_rate(150, -1.0)
