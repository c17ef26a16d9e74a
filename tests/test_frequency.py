import pytest

from lottosim.frequency import FrequencyModel, TopKEntry
from lottosim.generator import DrawGenerator

DRAW_A = (3, 7, 12, 29, 44, 2, 9)
DRAW_B = (1, 2, 3, 4, 5, 1, 2)


def test_record_counts_draws_and_numbers():
    model = FrequencyModel()
    model.record(DRAW_A)
    model.record(DRAW_A)
    model.record(DRAW_B)

    assert model.count(DRAW_A) == 2
    assert model.count(DRAW_B) == 1
    assert model.count((1, 2, 3, 4, 6, 1, 2)) == 0
    assert len(model) == 2
    assert model.distinct_draws == 2
    # 1 and 2 appear as both main and bonus numbers in DRAW_B
    assert model.number_counts[1] == 2
    assert model.number_counts[2] == 2 + 2
    assert model.number_counts[44] == 2
    assert sum(model.number_counts.values()) == 7 * 3


def test_sum_of_draw_counts_equals_record_calls():
    model = FrequencyModel()
    draws = DrawGenerator(seed=5).generate_many(500)
    for draw in draws:
        model.record(draw)
    assert sum(model.draw_counts.values()) == 500
    assert model.total_draws == 500


def test_snapshot_is_a_copy():
    model = FrequencyModel()
    model.record(DRAW_A)
    snap = model.snapshot()
    model.record(DRAW_B)
    assert snap == [(DRAW_A, 1)]


def test_top_k_entry_fields():
    entry = TopKEntry(DRAW_A, 3)
    assert entry.draw == DRAW_A
    assert entry.count == 3


def test_number_frequency_table():
    model = FrequencyModel()
    model.record(DRAW_A)
    model.record(DRAW_B)
    table = model.number_frequency()

    assert list(table.index) == list(range(1, 51))
    assert table.loc[2, "count"] == 3
    assert table.loc[50, "count"] == 0
    # 1-10 can appear as main or bonus numbers
    assert table.loc[1, "expected"] == pytest.approx(2 * (5 / 50 + 2 / 10))
    assert table.loc[20, "expected"] == pytest.approx(2 * 5 / 50)
    assert table["expected"].sum() == pytest.approx(14)


def test_uniformity_test_empty_model():
    result = FrequencyModel().uniformity_test()
    assert result == {"chi2": None, "p_value": None, "total_draws": 0}


def test_uniformity_test_on_generated_draws():
    model = FrequencyModel()
    for draw in DrawGenerator(seed=11).generate_many(3000):
        model.record(draw)
    result = model.uniformity_test()
    assert result["total_draws"] == 3000
    assert result["chi2"] >= 0
    assert 0.0 <= result["p_value"] <= 1.0


def test_hot_cold_numbers():
    model = FrequencyModel()
    for _ in range(10):
        model.record((41, 42, 43, 44, 45, 1, 2))
    hot_cold = model.hot_cold_numbers(n=3)
    hot_numbers = [n for n, _ in hot_cold["hot"]]
    assert set(hot_numbers) <= {41, 42, 43, 44, 45}
    assert len(hot_cold["cold"]) == 3
