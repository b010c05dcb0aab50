import math

import numpy as np
import pandas as pd
import pytest

from bay_wq.config import DEFAULT_CHLOROPHYLL_SCALE, AxisScaleConfig
from bay_wq.errors import AmbiguousLabelMatch, InvalidRange, ScaleConfigError
from bay_wq.scales import AdaptiveAxisScale, label_breaks, nice_breaks, select_breaks

TRANSFORMED = [0.0, 0.693, 1.792, 2.398, 3.932]


class TestSelectBreaks:
    def test_low_range_gets_transformed_preferred_breaks(self):
        breaks = select_breaks((0, 4.8))
        np.testing.assert_allclose(breaks, TRANSFORMED, atol=5e-4)

    def test_preferred_breaks_keep_order(self):
        breaks = select_breaks((0.2, 3.0))
        np.testing.assert_allclose(breaks, np.log1p([0, 1, 5, 10, 50]))
        assert list(breaks) == sorted(breaks)

    def test_high_range_gets_nice_breaks(self):
        breaks = select_breaks((0, 30))
        np.testing.assert_allclose(breaks, [0, 10, 20, 30])

    @pytest.mark.parametrize("panel_range", [(0, 5.0), (2, 9), (-3, 40), (100, 2500)])
    def test_at_or_above_threshold_matches_generic_algorithm(self, panel_range):
        expected = nice_breaks(*panel_range, target_count=5)
        np.testing.assert_array_equal(select_breaks(panel_range), expected)

    def test_returns_fresh_array(self):
        first = select_breaks((0, 4))
        first[0] = 99.0
        assert select_breaks((0, 4))[0] == 0.0

    @pytest.mark.parametrize("panel_range", [
        (0, math.inf),
        (-math.inf, 3),
        (math.nan, 1),
        (5, 1),
        (2, 2),
        (None, 3),
    ])
    def test_invalid_range(self, panel_range):
        with pytest.raises(InvalidRange):
            select_breaks(panel_range)

    def test_explicit_panel_overrides_heuristic(self):
        # Secchi depth sits below the threshold but is not the chlorophyll panel
        secchi = select_breaks((0.5, 2.2), panel="Secchi Depth")
        np.testing.assert_array_equal(secchi, nice_breaks(0.5, 2.2))

        chla = select_breaks((0, 30), panel="Chlorophyll a")
        np.testing.assert_allclose(chla, TRANSFORMED, atol=5e-4)

    def test_threshold_is_configurable(self):
        scale = AdaptiveAxisScale(AxisScaleConfig(threshold=10.0))
        np.testing.assert_allclose(scale.select_breaks((0, 8)), TRANSFORMED, atol=5e-4)
        assert not np.allclose(select_breaks((0, 8))[:2], TRANSFORMED[:2])


class TestLabelBreaks:
    def test_transformed_breaks_map_back(self):
        assert label_breaks(TRANSFORMED) == [0, 1, 5, 10, 50]

    def test_unmatched_breaks_pass_through(self):
        assert label_breaks([0, 10, 20, 30]) == [0, 10, 20, 30]

    def test_missing_entries_stay_missing(self):
        assert label_breaks([np.nan, 0.693, None]) == [None, 1, None]

    def test_missing_passthrough_on_unmatched(self):
        assert label_breaks([10, pd.NA, 30]) == [10, None, 30]

    @pytest.mark.parametrize("value", DEFAULT_CHLOROPHYLL_SCALE.preferred_breaks)
    def test_round_trip(self, value):
        assert label_breaks([np.log1p(value)]) == [value]

    def test_float_noise_is_absorbed(self):
        noisy = [np.log1p(v) + 1e-6 for v in (1, 5, 10)]
        assert label_breaks(noisy) == [1, 5, 10]

    @pytest.mark.parametrize("candidates", [[], [None], [np.nan, np.nan], [pd.NA, None]])
    def test_all_missing_is_ambiguous(self, candidates):
        with pytest.raises(AmbiguousLabelMatch):
            label_breaks(candidates)

    def test_all_missing_with_panel_is_not_ambiguous(self):
        assert label_breaks([np.nan, None], panel="Chlorophyll a") == [None, None]
        assert label_breaks([np.nan], panel="Salinity") == [None]

    def test_explicit_other_panel_never_back_transforms(self):
        assert label_breaks([0, 0.693], panel="pH") == [0, 0.693]

    def test_explicit_scaled_panel_uses_inverse_for_unmatched(self):
        labels = label_breaks([0.693, 2.0, np.nan], panel="Chlorophyll a")
        assert labels == [1, 6.4, None]

    def test_output_length_matches_input(self):
        candidates = [np.nan, 0, 1.792, np.nan, 3.932]
        assert len(label_breaks(candidates)) == len(candidates)


class TestAxisScaleConfig:
    def test_default_transformed_breaks(self):
        np.testing.assert_allclose(DEFAULT_CHLOROPHYLL_SCALE.transformed_breaks(), TRANSFORMED, atol=5e-4)

    def test_threshold_must_clear_transformed_breaks(self):
        with pytest.raises(ScaleConfigError):
            AxisScaleConfig(threshold=3.5)

    @pytest.mark.parametrize("breaks", [(), (0, 5, 1), (0, 1, 1), (0, math.inf)])
    def test_break_set_validation(self, breaks):
        with pytest.raises(ScaleConfigError):
            AxisScaleConfig(preferred_breaks=breaks)

    def test_custom_break_set(self):
        scale = AdaptiveAxisScale(AxisScaleConfig(preferred_breaks=(0, 2, 20), threshold=4.0))
        transformed = np.log1p([0, 2, 20])
        np.testing.assert_allclose(scale.select_breaks((0, 3.5)), transformed)
        assert scale.label_breaks(list(transformed)) == [0, 2, 20]
