"""
Unit tests for conversion factor tables.

The expected values are the constants of the server-side deduction
procedure; any drift here means client previews and real deductions
disagree.
"""

import pytest

from inventory_costing.domain.units.factors import (
    CUP_ML,
    DENSITY_G_PER_CUP,
    VOLUME_TO_ML,
    WEIGHT_TO_G,
    density_for,
    factor_table_snapshot,
    to_grams,
    to_milliliters,
)
from inventory_costing.domain.units.models import VolumeUnit, WeightUnit


# ═══════════════════════════════════════════════════════════
# SERVER CONSTANTS
# ═══════════════════════════════════════════════════════════

SERVER_VOLUME_ML = {
    "fl oz": 29.5735,
    "cup": 236.588,
    "tbsp": 14.7868,
    "tsp": 4.92892,
    "gal": 3785.41,
    "qt": 946.353,
    "pint": 473.176,
    "l": 1000.0,
    "ml": 1.0,
}

SERVER_WEIGHT_G = {
    "oz": 28.3495,
    "lb": 453.592,
    "kg": 1000.0,
    "g": 1.0,
}

SERVER_DENSITY_G_PER_CUP = {
    "rice": 185.0,
    "flour": 120.0,
    "sugar": 200.0,
    "butter": 227.0,
}


class TestServerAgreement:
    """Cross-check tables against the server constants."""

    def test_snapshot_matches_server(self) -> None:
        """Should match every server constant to four significant digits."""
        snapshot = factor_table_snapshot()

        assert snapshot["volume_ml"].keys() == SERVER_VOLUME_ML.keys()
        assert snapshot["weight_g"].keys() == SERVER_WEIGHT_G.keys()
        assert snapshot["density_g_per_cup"].keys() == SERVER_DENSITY_G_PER_CUP.keys()

        for unit, factor in SERVER_VOLUME_ML.items():
            assert snapshot["volume_ml"][unit] == pytest.approx(factor, rel=1e-4)
        for unit, factor in SERVER_WEIGHT_G.items():
            assert snapshot["weight_g"][unit] == pytest.approx(factor, rel=1e-4)
        for name, grams in SERVER_DENSITY_G_PER_CUP.items():
            assert snapshot["density_g_per_cup"][name] == pytest.approx(grams, rel=1e-4)

    def test_enum_members_match_tables(self) -> None:
        """Should have a factor for every convertible unit."""
        assert set(VOLUME_TO_ML) == set(VolumeUnit)
        assert set(WEIGHT_TO_G) == set(WeightUnit)

    def test_cup_constant(self) -> None:
        """Should expose the cup size used by the density bridge."""
        assert CUP_ML == 236.588

    def test_snapshot_is_a_copy(self) -> None:
        """Should not leak the live tables."""
        snapshot = factor_table_snapshot()
        snapshot["volume_ml"]["cup"] = 250.0
        assert VOLUME_TO_ML[VolumeUnit.CUP] == 236.588


class TestReadOnly:
    """Tables are immutable at runtime."""

    def test_volume_table_read_only(self) -> None:
        """Should reject writes to the volume table."""
        with pytest.raises(TypeError):
            VOLUME_TO_ML[VolumeUnit.CUP] = 250.0  # type: ignore[index]

    def test_weight_table_read_only(self) -> None:
        """Should reject writes to the weight table."""
        with pytest.raises(TypeError):
            WEIGHT_TO_G[WeightUnit.LB] = 454.0  # type: ignore[index]

    def test_density_table_read_only(self) -> None:
        """Should reject new densities."""
        with pytest.raises(TypeError):
            DENSITY_G_PER_CUP["oats"] = 90.0  # type: ignore[index]


class TestHelpers:
    """Test base-unit helpers and density lookup."""

    def test_to_milliliters(self) -> None:
        """Should convert through the volume table."""
        assert to_milliliters(1.5, VolumeUnit.FL_OZ) == pytest.approx(44.36025)
        assert to_milliliters(2, VolumeUnit.L) == 2000.0

    def test_to_grams(self) -> None:
        """Should convert through the weight table."""
        assert to_grams(4, WeightUnit.OZ) == pytest.approx(113.398)
        assert to_grams(0.5, WeightUnit.KG) == 500.0

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("Rice", 185.0),
            ("Mahatma JASMINE rice", 185.0),
            ("All Purpose Flour", 120.0),
            ("Granulated Sugar", 200.0),
            ("Unsalted Butter", 227.0),
        ],
    )
    def test_density_match(self, name: str, expected: float) -> None:
        """Should match ingredient names case-insensitively by substring."""
        assert density_for(name) == expected

    def test_density_first_match_wins(self) -> None:
        """Should use table order when several keywords match."""
        assert density_for("Rice Flour") == 185.0
        assert density_for("Butter Sugar Cookies") == 200.0

    @pytest.mark.parametrize("name", ["Olive Oil", "", None])
    def test_density_missing(self, name) -> None:
        """Should return None when nothing matches."""
        assert density_for(name) is None
