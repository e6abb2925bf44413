"""Tests for the profile cutting-stock optimizer.

Tests cover:
- Pipe selection by least leftover, with kerf between cuts
- Scrap and usable offcut classification
- Eager infeasibility check
- Catalogue normalization and skipped entries
- Material and cut validation
- Conservation of length on every pipe
"""

from __future__ import annotations

from typing import Any

import pytest

from profilecut.application.diagnostics import CollectingDiagnostics
from profilecut.domain import (
    CuttingConfig,
    ProfileCuttingError,
    ProfileCuttingOptimizer,
    ProfileMaterial,
    StandardLengthEntry,
    StandardStockLength,
    calculate_profile_consumption,
)
from profilecut.domain.services.cutting_stock import WorkingCut, remove_packed_cuts


def make_material(*lengths: Any, unit: str = "ft", **overrides: Any) -> ProfileMaterial:
    fields: dict[str, Any] = {
        "id": "mat-1",
        "company_id": "acme",
        "name": "Test Profile",
        "standard_lengths": tuple(StandardLengthEntry(length=l, unit=unit) for l in lengths),
    }
    fields.update(overrides)
    return ProfileMaterial(**fields)


# =============================================================================
# Configuration
# =============================================================================


class TestCuttingConfig:
    """Tests for CuttingConfig validation."""

    def test_defaults(self) -> None:
        config = CuttingConfig()
        assert config.kerf_in == 0.125
        assert config.scrap_threshold_ft == 3.0
        assert config.epsilon_in == 0.001
        assert config.scrap_threshold_in == 36.0

    def test_negative_kerf_rejected(self) -> None:
        with pytest.raises(ValueError, match="Kerf"):
            CuttingConfig(kerf_in=-0.1)

    def test_excessive_kerf_rejected(self) -> None:
        with pytest.raises(ValueError, match="Kerf"):
            CuttingConfig(kerf_in=1.0)

    def test_negative_threshold_rejected(self) -> None:
        with pytest.raises(ValueError, match="threshold"):
            CuttingConfig(scrap_threshold_ft=-1)

    def test_zero_epsilon_rejected(self) -> None:
        with pytest.raises(ValueError, match="Epsilon"):
            CuttingConfig(epsilon_in=0)


# =============================================================================
# Core scenarios
# =============================================================================


class TestBasicScenarios:
    """End-to-end consumption estimates for small cut lists."""

    def test_three_cuts_fit_one_pipe(self, twelve_foot_material: ProfileMaterial) -> None:
        """60 + 60 + 22.8 plus two kerfs leaves 0.95in, which is scrap."""
        result = calculate_profile_consumption(twelve_foot_material, "acme", [5, 5, 1.9])

        assert result.total_pipes_from_stock == 1
        assert len(result.pipes_taken_per_standard_length) == 1
        purchase = result.pipes_taken_per_standard_length[0]
        assert purchase.length == "12"
        assert purchase.unit == "ft"
        assert purchase.length_in_inches == pytest.approx(144.0)
        assert purchase.count == 1
        assert result.total_scrap_ft == pytest.approx(0.079)
        assert result.usable_offcuts_ft == ()

    def test_cut_longer_than_any_pipe(self, twelve_foot_material: ProfileMaterial) -> None:
        with pytest.raises(ProfileCuttingError) as exc_info:
            calculate_profile_consumption(twelve_foot_material, "acme", [20])

        error = exc_info.value
        assert error.error_type == "infeasible"
        assert "240.00in (20.00ft)" in error.message
        assert "144.00in (12.00ft)" in error.message

    def test_least_leftover_beats_larger_pipe(self) -> None:
        """Two 9ft cuts on 10ft and 6ft stock take two 10ft pipes."""
        material = make_material(10, 6)

        result = calculate_profile_consumption(material, "acme", [9, 9])

        assert result.total_pipes_from_stock == 2
        assert [(p.length, p.count) for p in result.pipes_taken_per_standard_length] == [
            ("10", 2)
        ]
        assert result.total_scrap_ft == pytest.approx(2.0)
        assert result.usable_offcuts_ft == ()

    def test_no_cuts(self, twelve_foot_material: ProfileMaterial) -> None:
        result = calculate_profile_consumption(twelve_foot_material, "acme", [])

        assert result.total_pipes_from_stock == 0
        assert result.pipes_taken_per_standard_length == ()
        assert result.total_scrap_ft == 0.0
        assert result.usable_offcuts_ft == ()

    def test_smaller_pipe_chosen_when_it_wastes_less(self) -> None:
        material = make_material(12, 8)

        result = calculate_profile_consumption(material, "acme", [7])

        assert [(p.length, p.count) for p in result.pipes_taken_per_standard_length] == [
            ("8", 1)
        ]
        assert result.total_scrap_ft == pytest.approx(1.0)

    def test_kerf_forces_second_pipe(self, twelve_foot_material: ProfileMaterial) -> None:
        """Two 6ft cuts need 144.125in with kerf, more than one 12ft pipe."""
        result = calculate_profile_consumption(twelve_foot_material, "acme", [6, 6])
        assert result.total_pipes_from_stock == 2

    def test_zero_kerf_fits_exactly(self, twelve_foot_material: ProfileMaterial) -> None:
        result = calculate_profile_consumption(
            twelve_foot_material, "acme", [6, 6], config=CuttingConfig(kerf_in=0)
        )

        assert result.total_pipes_from_stock == 1
        assert result.total_scrap_ft == 0.0
        assert result.usable_offcuts_ft == ()

    def test_multiple_pipes_of_one_length(self, twelve_foot_material: ProfileMaterial) -> None:
        """Five 5ft cuts pack 2 + 2 + 1 onto three 12ft pipes."""
        result = calculate_profile_consumption(twelve_foot_material, "acme", [5] * 5)

        assert result.total_pipes_from_stock == 3
        assert [layout.cut_count for layout in result.layouts] == [2, 2, 1]
        # 23.875in left on each of the first two pipes
        assert result.total_scrap_ft == pytest.approx(3.979)
        assert result.usable_offcuts_ft == (7.0,)


# =============================================================================
# Scrap and offcut classification
# =============================================================================


class TestLeftoverClassification:
    """Tests for splitting leftovers into scrap and usable offcuts."""

    def test_long_leftover_is_offcut(self, twelve_foot_material: ProfileMaterial) -> None:
        result = calculate_profile_consumption(twelve_foot_material, "acme", [8])

        assert result.usable_offcuts_ft == (4.0,)
        assert result.total_scrap_ft == 0.0

    def test_leftover_at_threshold_is_offcut(
        self, twelve_foot_material: ProfileMaterial
    ) -> None:
        result = calculate_profile_consumption(twelve_foot_material, "acme", [9])

        assert result.usable_offcuts_ft == (3.0,)
        assert result.total_scrap_ft == 0.0

    def test_offcuts_sorted_ascending(self) -> None:
        material = make_material(12)
        result = calculate_profile_consumption(material, "acme", [8, 5])

        # 8ft and 5ft each get a pipe: 8 + 5 + kerf exceeds 12ft
        assert result.usable_offcuts_ft == (4.0, 7.0)

    def test_custom_threshold(self, twelve_foot_material: ProfileMaterial) -> None:
        result = calculate_profile_consumption(
            twelve_foot_material,
            "acme",
            [8],
            config=CuttingConfig(scrap_threshold_ft=5.0),
        )

        assert result.usable_offcuts_ft == ()
        assert result.total_scrap_ft == pytest.approx(4.0)


# =============================================================================
# Invariants
# =============================================================================


class TestPackingInvariants:
    """Properties that hold for every pipe in a result."""

    CUT_LISTS = [
        [5, 5, 1.9],
        [7.5, 3.25, 2, 2, 2, 11.9, 0.5],
        [1] * 25,
        [9.99, 9.99, 0.01, 6, 4.5, 3.3],
    ]

    @pytest.mark.parametrize("cuts", CUT_LISTS)
    def test_length_conserved_on_every_pipe(self, cuts: list[float]) -> None:
        material = make_material(12, 20, 8)
        result = calculate_profile_consumption(material, "acme", cuts)

        for layout in result.layouts:
            kerf = 0.125 * (layout.cut_count - 1)
            total = sum(layout.cuts_in) + kerf + layout.immediate_scrap_in
            assert total == pytest.approx(layout.stock.length_in_inches, abs=0.001)
            assert layout.kerf_loss_in == pytest.approx(kerf)
            assert layout.immediate_scrap_in >= -0.001

    @pytest.mark.parametrize("cuts", CUT_LISTS)
    def test_every_cut_placed_once(self, cuts: list[float]) -> None:
        material = make_material(12, 20, 8)
        result = calculate_profile_consumption(material, "acme", cuts)

        placed = sorted(c for layout in result.layouts for c in layout.cuts_in)
        assert placed == pytest.approx(sorted(c * 12 for c in cuts))
        assert result.unfulfillable_cuts_in == ()
        assert result.total_pipes_from_stock == sum(
            p.count for p in result.pipes_taken_per_standard_length
        )

    def test_subset_of_feasible_list_is_feasible(self) -> None:
        material = make_material(12)
        cuts = [11.5, 6, 6, 3, 0.75]

        for i in range(len(cuts)):
            subset = cuts[:i] + cuts[i + 1 :]
            result = calculate_profile_consumption(material, "acme", subset)
            assert result.total_pipes_from_stock >= 1

    def test_input_not_mutated(self, material_document: dict[str, Any]) -> None:
        cuts = [1.9, 5, 5]
        before = [dict(entry) for entry in material_document["standardLengths"]]

        calculate_profile_consumption(material_document, "acme", cuts)

        assert cuts == [1.9, 5, 5]
        assert material_document["standardLengths"] == before

    def test_tie_keeps_first_catalogue_entry(self) -> None:
        material = make_material(12, 12)

        result = calculate_profile_consumption(material, "acme", [10, 10])

        assert [p.count for p in result.pipes_taken_per_standard_length] == [2]
        assert all(layout.stock.index == 0 for layout in result.layouts)

    def test_to_dict_field_names(self, twelve_foot_material: ProfileMaterial) -> None:
        result = calculate_profile_consumption(twelve_foot_material, "acme", [8])

        assert result.to_dict() == {
            "totalPipesFromStock": 1,
            "pipesTakenPerStandardLength": [
                {"length": "12", "unit": "ft", "lengthInInches": 144.0, "count": 1}
            ],
            "totalScrapGenerated_ft": 0.0,
            "finalUsableOffcuts_ft": [4.0],
        }


# =============================================================================
# Catalogue normalization
# =============================================================================


class TestStandardLengths:
    """Tests for standard length normalization."""

    def test_malformed_entries_skipped_with_warning(
        self, diagnostics: CollectingDiagnostics
    ) -> None:
        material = ProfileMaterial(
            id="mat-1",
            company_id="acme",
            standard_lengths=(
                StandardLengthEntry(length="abc", unit="ft"),
                StandardLengthEntry(length=12, unit="ft"),
                StandardLengthEntry(length=5, unit="pcs"),
                StandardLengthEntry(length=0, unit="ft"),
            ),
        )

        result = calculate_profile_consumption(
            material, "acme", [5], diagnostics=diagnostics
        )

        assert result.total_pipes_from_stock == 1
        assert result.pipes_taken_per_standard_length[0].length == "12"
        assert len(diagnostics.warnings) == 3
        assert "index 0" in diagnostics.warnings[0]

    def test_oversized_entry_skipped_with_warning(
        self, diagnostics: CollectingDiagnostics
    ) -> None:
        material = make_material(10**400, 12)

        result = calculate_profile_consumption(
            material, "acme", [5], diagnostics=diagnostics
        )

        assert result.pipes_taken_per_standard_length[0].length == "12"
        assert len(diagnostics.warnings) == 1
        assert "index 0" in diagnostics.warnings[0]

    def test_oversized_cut_is_domain_error(
        self, twelve_foot_material: ProfileMaterial
    ) -> None:
        with pytest.raises(ProfileCuttingError) as exc_info:
            calculate_profile_consumption(twelve_foot_material, "acme", [10**400])
        assert exc_info.value.error_type == "invalid_cut"

    def test_no_standard_lengths(self) -> None:
        with pytest.raises(ProfileCuttingError, match="no defined standard lengths") as exc_info:
            calculate_profile_consumption(make_material(), "acme", [5])
        assert exc_info.value.error_type == "invalid_catalogue"

    def test_no_usable_standard_lengths(self, diagnostics: CollectingDiagnostics) -> None:
        material = make_material("abc", -4)

        with pytest.raises(ProfileCuttingError, match="No valid standard lengths"):
            calculate_profile_consumption(material, "acme", [5], diagnostics=diagnostics)
        assert len(diagnostics.warnings) == 2

    def test_metric_catalogue(self) -> None:
        material = make_material(6, unit="m")

        result = calculate_profile_consumption(material, "acme", [10, 5])

        purchase = result.pipes_taken_per_standard_length[0]
        assert (purchase.length, purchase.unit) == ("6", "m")
        assert purchase.length_in_inches == pytest.approx(236.2205, abs=1e-3)

    def test_document_with_decimal_wrappers(self, material_document: dict[str, Any]) -> None:
        result = calculate_profile_consumption(
            material_document, "acme", [{"$numberDecimal": "5"}, "5", 1.9]
        )

        assert result.total_pipes_from_stock == 1
        assert result.pipes_taken_per_standard_length[0].length == "12"


# =============================================================================
# Validation
# =============================================================================


class TestValidation:
    """Tests for material and cut validation."""

    def test_missing_material(self) -> None:
        with pytest.raises(ProfileCuttingError, match="Invalid Material object"):
            calculate_profile_consumption(None, "acme", [5])

    def test_material_without_id(self) -> None:
        with pytest.raises(ProfileCuttingError, match="Invalid Material object"):
            calculate_profile_consumption(make_material(12, id=None), "acme", [5])

    def test_document_without_category(self) -> None:
        document = {
            "_id": "mat-1",
            "companyId": "acme",
            "standardLengths": [{"length": 12, "unit": "ft"}],
        }

        with pytest.raises(ProfileCuttingError, match="only for Profile materials"):
            calculate_profile_consumption(document, "acme", [5])

    def test_other_company(self, twelve_foot_material: ProfileMaterial) -> None:
        with pytest.raises(ProfileCuttingError) as exc_info:
            calculate_profile_consumption(twelve_foot_material, "other-co", [5])

        assert exc_info.value.message == "Material not associated with this company."
        assert exc_info.value.error_type == "invalid_material"
        assert exc_info.value.status_code == 400

    def test_non_profile_category(self) -> None:
        material = make_material(12, category="Hardware")
        with pytest.raises(ProfileCuttingError, match="only for Profile materials"):
            calculate_profile_consumption(material, "acme", [5])

    @pytest.mark.parametrize("bad_cut", [0, -2, "abc", None, True, {"length": 5}])
    def test_invalid_cut(self, twelve_foot_material: ProfileMaterial, bad_cut: Any) -> None:
        with pytest.raises(ProfileCuttingError) as exc_info:
            calculate_profile_consumption(twelve_foot_material, "acme", [5, bad_cut])

        assert exc_info.value.error_type == "invalid_cut"
        assert "index 1" in exc_info.value.message


# =============================================================================
# Optimizer internals
# =============================================================================


class TestUnfulfillableCuts:
    """A cut no pipe can hold becomes scrap instead of looping forever."""

    def test_cut_larger_than_all_stock_written_off(
        self, diagnostics: CollectingDiagnostics
    ) -> None:
        optimizer = ProfileCuttingOptimizer(diagnostics=diagnostics)
        stock = [StandardStockLength(length="1", unit="ft", length_in_inches=12.0, index=0)]

        layouts, unfulfillable = optimizer._pack(stock, [WorkingCut(24.0), WorkingCut(6.0)])

        assert unfulfillable == [24.0]
        assert len(layouts) == 1
        assert layouts[0].cuts_in == (6.0,)
        assert any("Unfulfillable" in w for w in diagnostics.warnings)

        result = optimizer._aggregate(layouts, unfulfillable)
        assert result.total_scrap_ft == pytest.approx(2.5)


class TestRemovePackedCuts:
    """Tests for removing packed cuts from the working list."""

    def test_missing_cut_warns_and_leaves_list(
        self, diagnostics: CollectingDiagnostics
    ) -> None:
        remaining = [WorkingCut(60.0), WorkingCut(30.0)]

        remove_packed_cuts(remaining, [WorkingCut(45.0)], CuttingConfig(), diagnostics)

        assert remaining == [WorkingCut(60.0), WorkingCut(30.0)]
        assert len(diagnostics.warnings) == 1
        assert "not found in remaining cuts" in diagnostics.warnings[0]

    def test_near_equal_removes_first_occurrence_only(
        self, diagnostics: CollectingDiagnostics
    ) -> None:
        remaining = [WorkingCut(60.0), WorkingCut(30.0), WorkingCut(60.0004)]

        remove_packed_cuts(remaining, [WorkingCut(60.0002)], CuttingConfig(), diagnostics)

        assert remaining == [WorkingCut(30.0), WorkingCut(60.0004)]
        assert diagnostics.warnings == []

    def test_identifier_must_match(self, diagnostics: CollectingDiagnostics) -> None:
        remaining = [WorkingCut(60.0, "a"), WorkingCut(60.0, "b")]

        remove_packed_cuts(remaining, [WorkingCut(60.0, "b")], CuttingConfig(), diagnostics)

        assert remaining == [WorkingCut(60.0, "a")]
