"""Tests for the credit scoring function."""

import math
from datetime import date

import pytest

from domain.models import RiskLevel
from domain.value_objects import BusinessProfile, Money
from services.scoring.credit_score import (
    FACTOR_WEIGHTS,
    compute_credit_score,
    risk_level_for,
)

YEAR = 2025


def profile(**overrides) -> dict:
    base = {
        "establishedYear": YEAR,
        "monthlyRevenue": "0",
        "employeeCount": 1,
        "businessType": "technology",
        "isVerified": False,
    }
    base.update(overrides)
    return base


class TestReferenceScenarios:
    def test_brand_new_unrecognised_business(self):
        result = compute_credit_score(profile(), current_year=YEAR)

        assert result.score == 600
        assert result.risk_level == RiskLevel.HIGH

    def test_large_established_trader_is_clamped(self):
        result = compute_credit_score(
            profile(
                establishedYear=YEAR - 10,
                monthlyRevenue="150000",
                employeeCount=60,
                businessType="trading",
                isVerified=True,
            ),
            current_year=YEAR,
        )

        assert result.score == 850
        assert result.risk_level == RiskLevel.LOW

    def test_small_services_firm(self):
        result = compute_credit_score(
            profile(
                establishedYear=YEAR - 3,
                monthlyRevenue="30000",
                employeeCount=8,
                businessType="services",
            ),
            current_year=YEAR,
        )

        assert result.score == 725
        assert result.risk_level == RiskLevel.MEDIUM

    def test_unparseable_revenue_counts_as_zero(self):
        garbage = compute_credit_score(profile(monthlyRevenue="abc"), current_year=YEAR)
        zero = compute_credit_score(profile(monthlyRevenue="0"), current_year=YEAR)

        assert garbage == zero

    def test_missing_business_type_is_like_unknown_type(self):
        data = profile()
        del data["businessType"]

        missing = compute_credit_score(data, current_year=YEAR)
        unknown = compute_credit_score(profile(businessType="technology"), current_year=YEAR)

        assert missing == unknown
        assert missing.factors["businessType"].score == 0


class TestThresholds:
    @pytest.mark.parametrize(
        "revenue, expected",
        [
            ("100000", 650),
            ("100000.01", 700),
            ("50000", 625),
            ("50001", 650),
            ("20000", 600),
            ("20000.5", 625),
        ],
    )
    def test_revenue_buckets_are_strict(self, revenue, expected):
        result = compute_credit_score(profile(monthlyRevenue=revenue), current_year=YEAR)
        assert result.score == expected

    @pytest.mark.parametrize(
        "employees, expected",
        [
            (50, 625),
            (51, 650),
            (10, 610),
            (11, 625),
            (5, 600),
            (6, 610),
            (5.5, 610),
            ("5.5", 610),
            (0, 600),
        ],
    )
    def test_employee_buckets_are_strict(self, employees, expected):
        result = compute_credit_score(profile(employeeCount=employees), current_year=YEAR)
        assert result.score == expected

    @pytest.mark.parametrize("age, bonus", [(0, 0), (1, 20), (4, 80), (5, 100), (30, 100)])
    def test_business_age_bonus_is_capped(self, age, bonus):
        result = compute_credit_score(profile(establishedYear=YEAR - age), current_year=YEAR)

        assert result.score == 600 + bonus
        assert result.factors["businessAge"].score == bonus

    @pytest.mark.parametrize("business_type", ["TRADING", "Manufacturing", "services"])
    def test_stable_types_match_case_insensitively(self, business_type):
        result = compute_credit_score(profile(businessType=business_type), current_year=YEAR)
        assert result.score == 630

    def test_missing_established_year_gives_no_age_credit(self):
        data = profile()
        del data["establishedYear"]

        assert compute_credit_score(data, current_year=YEAR).score == 600

    def test_score_floor_is_300(self):
        # only reachable with a founding year in the future
        result = compute_credit_score(profile(establishedYear=YEAR + 20), current_year=YEAR)

        assert result.score == 300
        assert result.risk_level == RiskLevel.HIGH


class TestRiskLevel:
    @pytest.mark.parametrize(
        "score, level",
        [
            (850, RiskLevel.LOW),
            (750, RiskLevel.LOW),
            (749, RiskLevel.MEDIUM),
            (650, RiskLevel.MEDIUM),
            (649, RiskLevel.HIGH),
            (300, RiskLevel.HIGH),
        ],
    )
    def test_cut_points(self, score, level):
        assert risk_level_for(score) == level

    def test_exactly_750_from_profile_is_low(self):
        result = compute_credit_score(
            profile(establishedYear=YEAR - 5, monthlyRevenue="30000", employeeCount=20),
            current_year=YEAR,
        )

        assert result.score == 750
        assert result.risk_level == RiskLevel.LOW

    def test_exactly_650_from_profile_is_medium(self):
        result = compute_credit_score(
            profile(monthlyRevenue="30000", employeeCount=20), current_year=YEAR
        )

        assert result.score == 650
        assert result.risk_level == RiskLevel.MEDIUM


class TestFactors:
    def test_exactly_five_named_factors(self):
        result = compute_credit_score(profile(), current_year=YEAR)

        assert list(result.factors) == [
            "businessAge",
            "revenue",
            "employeeCount",
            "businessType",
            "verification",
        ]

    def test_weights_are_fixed_and_sum_to_one(self):
        for data in (profile(), profile(monthlyRevenue="999999", isVerified=True), {}):
            result = compute_credit_score(data, current_year=YEAR)
            weights = {name: f.weight for name, f in result.factors.items()}

            assert weights == FACTOR_WEIGHTS
            assert math.isclose(sum(weights.values()), 1.0)

    # the earlier revenue factor was three-way (>100000 ? 100 : >50000 ? 50 : 25);
    # the factor now stops at 50 and only the score keeps the 100k tier
    def test_revenue_factor_uses_two_way_split(self):
        high = compute_credit_score(profile(monthlyRevenue="150000"), current_year=YEAR)
        mid = compute_credit_score(profile(monthlyRevenue="60000"), current_year=YEAR)
        low = compute_credit_score(profile(monthlyRevenue="0"), current_year=YEAR)

        assert high.factors["revenue"].score == 50
        assert mid.factors["revenue"].score == 50
        assert low.factors["revenue"].score == 25
        # while the score itself still tells them apart
        assert high.score - mid.score == 50

    def test_employee_factor_has_a_floor_of_ten(self):
        result = compute_credit_score(profile(employeeCount=0), current_year=YEAR)
        assert result.factors["employeeCount"].score == 10

    def test_verification_only_moves_the_factor(self):
        verified = compute_credit_score(profile(isVerified=True), current_year=YEAR)
        unverified = compute_credit_score(profile(isVerified=False), current_year=YEAR)

        assert verified.factors["verification"].score == 50
        assert unverified.factors["verification"].score == 0
        assert verified.score == unverified.score

    def test_score_is_not_a_weighted_sum(self):
        result = compute_credit_score(profile(establishedYear=YEAR - 3), current_year=YEAR)
        weighted = sum(f.score * f.weight for f in result.factors.values())

        assert result.score == 660
        assert not math.isclose(result.score, weighted)


class TestTotality:
    @pytest.mark.parametrize(
        "data",
        [
            None,
            {},
            {"monthlyRevenue": None, "employeeCount": None, "establishedYear": None},
            {"monthlyRevenue": "", "employeeCount": "many", "establishedYear": "soon"},
            {"monthlyRevenue": "NaN", "employeeCount": float("nan")},
            {"monthlyRevenue": "Infinity", "employeeCount": float("inf")},
            {"monthlyRevenue": [1, 2], "businessType": 42},
        ],
    )
    def test_garbage_never_raises(self, data):
        result = compute_credit_score(data, current_year=YEAR)
        assert 300 <= result.score <= 850

    @pytest.mark.parametrize(
        "data",
        [
            {"employeeCount": "1e9999999"},
            {"establishedYear": "1e9999999"},
            {"establishedYear": "-1e9999999"},
            {"employeeCount": 10**400, "establishedYear": "9" * 5000},
        ],
    )
    def test_huge_numbers_are_clamped_not_expanded(self, data):
        result = compute_credit_score(data, current_year=YEAR)
        assert 300 <= result.score <= 850

    def test_exponent_employee_count_clears_top_bucket(self):
        result = compute_credit_score(profile(employeeCount="1e9999999"), current_year=YEAR)
        assert result.score == 650

    def test_snake_case_keys_are_accepted(self):
        camel = compute_credit_score(
            {"monthlyRevenue": "60000", "employeeCount": 12}, current_year=YEAR
        )
        snake = compute_credit_score(
            {"monthly_revenue": "60000", "employee_count": 12}, current_year=YEAR
        )
        assert camel == snake

    def test_accepts_a_business_profile(self):
        bp = BusinessProfile(
            established_year=YEAR - 3,
            monthly_revenue=Money.parse("30000"),
            employee_count=8,
            business_type="services",
        )
        assert compute_credit_score(bp, current_year=YEAR).score == 725

    def test_same_input_same_output(self):
        data = profile(establishedYear=YEAR - 2, monthlyRevenue="75000", employeeCount=15)

        first = compute_credit_score(data, current_year=YEAR)
        second = compute_credit_score(data, current_year=YEAR)

        assert first == second
        assert first.model_dump() == second.model_dump()

    def test_defaults_to_this_year(self):
        result = compute_credit_score({"establishedYear": date.today().year - 1})
        assert result.score == 620
