import pytest

from src.planning.charge_time import calculate_charge_time


class TestCalculateChargeTime:

    def test_fifty_percent_at_150kw(self):
        # 37.5 kWh / 150 kW = 15 min, plus 5 min setup
        assert calculate_charge_time(50, 150) == 20

    def test_rounds_up_to_next_minute(self):
        # 41.25% -> 30.9375 kWh / 150 kW = 12.375 min -> 13
        assert calculate_charge_time(41.25, 150) == 18

    def test_zero_percent_is_setup_buffer_only(self):
        assert calculate_charge_time(0, 150) == 5

    def test_negative_percent_is_setup_buffer_only(self):
        assert calculate_charge_time(-10, 150) == 5

    def test_unknown_power_uses_level2_fallback(self):
        # 75 kWh / 11 kW = 409.09 min -> 410
        assert calculate_charge_time(100, 0) == 415
        assert calculate_charge_time(100, None) == 415

    @pytest.mark.parametrize("power", [7, 50, 150, 350])
    def test_non_decreasing_in_percent(self, power):
        times = [calculate_charge_time(p, power) for p in range(0, 101, 5)]
        assert times == sorted(times)

    @pytest.mark.parametrize("percent", [1, 25, 60, 100])
    def test_non_increasing_in_power(self, percent):
        times = [calculate_charge_time(percent, kw) for kw in (7, 11, 50, 150, 250, 350)]
        assert times == sorted(times, reverse=True)

    def test_always_whole_minutes(self):
        assert isinstance(calculate_charge_time(33.3, 62.5), int)
