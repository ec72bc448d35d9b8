import pytest

from builders import D, bill, envelope, snapshot
from fortress.core.affordability import affected_envelopes, evaluate_purchase
from fortress.core import config
from fortress.core.config import Policy
from fortress.core.errors import ValidationError

VERDICT_RANK = {"yes": 0, "warning": 1, "no": 2}


def test_small_purchase_is_affordable():
    result = evaluate_purchase("50.00", snapshot(spending="850.00"))

    assert result.status == "yes"
    assert result.can_buy is True
    assert result.remaining_after == D("800.00")
    assert result.warnings == []
    assert "$800.00" in result.recommendation


def test_purchase_over_balance_is_rejected():
    result = evaluate_purchase("900.00", snapshot(spending="850.00"))

    assert result.status == "no"
    assert result.can_buy is False
    assert result.remaining_after == D("-50.00")
    assert "$850.00" in result.warnings[0]
    assert result.warnings[0] in result.recommendation


def test_low_remaining_balance_warns():
    result = evaluate_purchase("780.00", snapshot(spending="850.00"))

    assert result.status == "warning"
    assert result.can_buy is True
    assert result.remaining_after == D("70.00")
    assert "$70.00" in result.warnings[0]
    assert result.recommendation.startswith("Proceed with caution")


def test_low_balance_threshold_is_exact_to_the_cent():
    assert evaluate_purchase("750.00", snapshot(spending="850.00")).status == "yes"
    assert evaluate_purchase("750.01", snapshot(spending="850.00")).status == "warning"


def test_low_balance_warning_can_be_switched_off():
    result = evaluate_purchase("780.00", snapshot(spending="850.00", warn=False))
    assert result.status == "yes"


def test_spending_the_whole_balance_is_allowed():
    result = evaluate_purchase("850.00", snapshot(spending="850.00", warn=False))
    assert result.status == "yes"
    assert result.remaining_after == D("0.00")


def test_flexible_envelope_without_room_warns():
    snap = snapshot(envelopes=[
        envelope("Entertainment", "40.00", id=1),
        envelope("Groceries", "500.00", id=2),
    ])
    result = evaluate_purchase("50.00", snap)

    assert result.status == "warning"
    assert "Entertainment" in result.warnings[0]
    assert "Groceries" not in result.warnings[0]


def test_strict_empty_and_overdrawn_envelopes_are_ignored():
    envelopes = [
        envelope("Rent", "40.00", strict=True, id=1),
        envelope("Fun", "0.00", id=2),
        envelope("Dining", "-20.00", budget="100.00", id=3),
    ]
    assert affected_envelopes(envelopes, D("50.00")) == []
    assert evaluate_purchase("50.00", snapshot(envelopes=envelopes)).status == "yes"


def test_envelope_warning_does_not_lift_a_rejection():
    snap = snapshot(spending="100.00", envelopes=[envelope("Fun", "40.00")])
    result = evaluate_purchase("150.00", snap)

    assert result.status == "no"
    assert len(result.warnings) == 2
    assert "$100.00" in result.warnings[0]


def test_short_bills_account_warns_on_large_purchase():
    snap = snapshot(spending="850.00", bills_balance="100.00", bills=[bill("Rent", "1500.00", 1)])
    result = evaluate_purchase("500.00", snap)

    assert result.status == "warning"
    assert "bills account" in result.warnings[0]


def test_short_bills_account_ignored_for_small_purchase():
    snap = snapshot(spending="850.00", bills_balance="100.00", bills=[bill("Rent", "1500.00", 1)])
    assert evaluate_purchase("400.00", snap).status == "yes"


def test_funded_bills_account_does_not_warn():
    snap = snapshot(spending="850.00", bills_balance="2500.00", bills=[bill("Rent", "1500.00", 1)])
    assert evaluate_purchase("500.00", snap).status == "yes"


def test_missing_spending_account_means_nothing_available():
    snap = snapshot()
    snap.accounts = []
    result = evaluate_purchase("1.00", snap)

    assert result.status == "no"
    assert result.safe_to_spend == D("0.00")


def test_result_reports_obligation_totals():
    snap = snapshot(
        envelopes=[
            envelope("Rent", "1500.00", strict=True, id=1),
            envelope("Insurance", "10.00", strict=True, budget="200.00", id=2),
            envelope("Groceries", "500.00", id=3),
        ],
        bills=[bill("Electric", "120.00", 15, id=1), bill("Internet", "80.00", 10, id=2)],
        debts=[],
    )
    result = evaluate_purchase("5.00", snap)

    assert result.strict_obligations == D("1700.00")
    assert result.upcoming_bills == D("200.00")
    assert result.debt_payments == D("0.00")


@pytest.mark.parametrize("amount", ["0", "-5.00", 0, "", None, "abc", "10.001", 12.5, True])
def test_invalid_purchase_amounts_are_rejected(amount):
    with pytest.raises(ValidationError):
        evaluate_purchase(amount, snapshot())


def test_integer_amounts_are_accepted():
    assert evaluate_purchase(50, snapshot()).purchase_amount == D("50.00")


def test_evaluation_is_repeatable():
    snap = snapshot(envelopes=[envelope("Fun", "40.00")], bills_balance="10.00", bills=[bill("Rent", "900.00", 1)])
    assert evaluate_purchase("450.00", snap) == evaluate_purchase("450.00", snap)


def test_larger_purchases_never_get_a_better_verdict():
    snap = snapshot(
        spending="850.00",
        bills_balance="300.00",
        envelopes=[envelope("Fun", "150.00", id=1), envelope("Groceries", "500.00", id=2)],
        bills=[bill("Rent", "1500.00", 1)],
    )
    previous = 0
    for cents in range(100, 100000, 1337):
        amount = D(cents) / 100
        rank = VERDICT_RANK[evaluate_purchase(amount, snap).status]
        assert rank >= previous, amount
        previous = rank


def test_policy_threshold_is_configurable():
    policy = Policy(low_balance_threshold=D("500.00"))
    assert evaluate_purchase("400.00", snapshot(spending="850.00"), policy).status == "warning"


def test_default_policy_follows_settings(monkeypatch):
    monkeypatch.setattr(config.settings, "LOW_BALANCE_THRESHOLD", D("500.00"))

    assert Policy().low_balance_threshold == D("500.00")
    assert evaluate_purchase("400.00", snapshot(spending="850.00")).status == "warning"
    assert Policy.from_settings() == Policy()
