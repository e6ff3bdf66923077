"""Rent estimator and commentary glue (external callables are faked)."""

from investcalc.estimates import (
    COMMENTARY_FALLBACK,
    EstimateStatus,
    apply_rent_estimate,
    commentary_summary,
    request_commentary,
    rent_search_type,
)
from investcalc.models import Jurisdiction, OverrideField, PropertyType
from investcalc.projection import project


class TestRentEstimate:
    def test_writes_back_like_manual_edit(self, default_session):
        inputs, overrides = default_session
        calls = []

        def estimator(suburb, jurisdiction, property_type, price):
            calls.append((suburb, jurisdiction, property_type, price))
            return 720.0

        updated, pinned, status = apply_rent_estimate(inputs, overrides, estimator)
        assert status == EstimateStatus.UPDATED
        assert updated.weekly_rent == 720
        assert pinned == overrides
        assert calls == [("Richmond", Jurisdiction.VIC, PropertyType.HOUSE, 850_000)]

    def test_old_home_searched_as_house(self, default_session):
        inputs, overrides = default_session
        seen = {}

        def estimator(suburb, jurisdiction, property_type, price):
            seen["type"] = property_type
            return 500

        inputs = inputs.model_copy(update={"property_type": PropertyType.OLD_HOME})
        apply_rent_estimate(inputs, overrides, estimator)
        assert seen["type"] == PropertyType.HOUSE

    def test_search_type_mapping(self):
        assert rent_search_type(PropertyType.HOME_AND_LAND) == PropertyType.HOUSE
        assert rent_search_type(PropertyType.APARTMENT) == PropertyType.APARTMENT

    def test_failure_leaves_inputs_alone(self, default_session):
        inputs, overrides = default_session

        def estimator(*args):
            raise TimeoutError("service down")

        updated, pinned, status = apply_rent_estimate(inputs, {OverrideField.INSURANCE}, estimator)
        assert status == EstimateStatus.FAILED
        assert updated == inputs
        assert pinned == frozenset({OverrideField.INSURANCE})

    def test_no_number_is_unavailable(self, default_session):
        inputs, overrides = default_session
        updated, _, status = apply_rent_estimate(inputs, overrides, lambda *a: None)
        assert status == EstimateStatus.UNAVAILABLE
        assert updated.weekly_rent == inputs.weekly_rent

    def test_non_numeric_reply_is_unavailable(self, default_session):
        inputs, overrides = default_session
        updated, _, status = apply_rent_estimate(inputs, overrides, lambda *a: "650")
        assert status == EstimateStatus.UNAVAILABLE
        assert updated == inputs

    def test_nan_reply_keeps_existing_rent(self, default_session):
        inputs, overrides = default_session
        updated, _, status = apply_rent_estimate(inputs, overrides, lambda *a: float("nan"))
        assert status == EstimateStatus.UNAVAILABLE
        assert updated.weekly_rent == 650

    def test_skipped_without_suburb(self, default_session):
        inputs, overrides = default_session
        inputs = inputs.model_copy(update={"suburb": ""})

        def estimator(*args):
            raise AssertionError("should not be called")

        _, _, status = apply_rent_estimate(inputs, overrides, estimator)
        assert status == EstimateStatus.SKIPPED


class TestCommentary:
    def test_summary_uses_year_zero(self, default_session):
        inputs = default_session[0]
        rows = project(inputs)
        summary = commentary_summary(inputs, rows)
        assert summary["location"] == "Richmond, VIC 3121"
        assert summary["net_cash_flow"] == rows[0].net_cash_flow
        assert summary["total_annual_expenses"] == rows[0].total_expenses
        assert summary["gross_yield"] == 3.98

    def test_text_passed_through(self):
        result = request_commentary({"price": 1}, lambda s: "Solid yield.")
        assert result.status == EstimateStatus.UPDATED
        assert result.text == "Solid yield."

    def test_failure_falls_back(self):
        def writer(summary):
            raise RuntimeError("quota")

        result = request_commentary({}, writer)
        assert result.status == EstimateStatus.FAILED
        assert result.text == COMMENTARY_FALLBACK

    def test_empty_text_is_unavailable(self):
        result = request_commentary({"price": 1}, lambda s: "")
        assert result.status == EstimateStatus.UNAVAILABLE
        assert result.text == COMMENTARY_FALLBACK
