from builders import HEADERS
from fortress.core.errors import DataUnavailable
from fortress.deps import get_advisor_client, get_snapshot_provider
from fortress.main import app


def _seed(client):
    resp = client.get("/api/accounts", headers=HEADERS)
    assert resp.status_code == 200
    return resp.json()


def test_check_requires_a_user(client):
    resp = client.post("/api/safe-to-spend-check", json={"amount": "50"})
    assert resp.status_code == 401


def test_affordable_purchase(client):
    _seed(client)
    resp = client.post("/api/safe-to-spend-check", json={"amount": "50.00"}, headers=HEADERS)

    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "yes"
    assert data["canBuy"] is True
    assert data["safeToSpend"] == "850.00"
    assert data["remainingAfter"] == "800.00"
    assert data["strictObligations"] == "2700.00"
    assert data["upcomingBills"] == "1850.00"
    assert data["debtPayments"] == "1050.00"


def test_unaffordable_purchase(client):
    _seed(client)
    data = client.post("/api/safe-to-spend-check", json={"amount": "900"}, headers=HEADERS).json()

    assert data["status"] == "no"
    assert data["canBuy"] is False
    assert "$850.00" in data["warnings"][0]


def test_risky_purchase(client):
    _seed(client)
    data = client.post("/api/safe-to-spend-check", json={"amount": 780}, headers=HEADERS).json()

    assert data["status"] == "warning"
    assert data["remainingAfter"] == "70.00"


def test_bad_amounts_get_a_400(client):
    for amount in ("0", "-1", "ten", 19.99):
        resp = client.post("/api/safe-to-spend-check", json={"amount": amount}, headers=HEADERS)
        assert resp.status_code == 400, amount
        assert "error" in resp.json()

    resp = client.post("/api/safe-to-spend-check", json={}, headers=HEADERS)
    assert resp.status_code == 400
    assert resp.json()["error"] == "Purchase amount is required"


def test_new_user_without_accounts_cannot_buy(client):
    headers = {"X-User-Id": "brand-new"}
    data = client.post("/api/safe-to-spend-check", json={"amount": "1"}, headers=headers).json()

    assert data["status"] == "no"
    assert data["safeToSpend"] == "0.00"


def test_funding_plan(client):
    _seed(client)
    resp = client.post(
        "/api/pay-schedules",
        json={"name": "Salary", "amount": "4000.00", "frequency": "biweekly", "nextPayday": "2026-03-13"},
        headers=HEADERS,
    )
    assert resp.status_code == 201

    plan = client.get("/api/funding-plan", headers=HEADERS).json()

    assert plan["billsTotal"] == "1850.00"
    assert plan["debtPaymentsTotal"] == "1050.00"
    assert plan["savingsTarget"] == "200.00"
    assert plan["totalObligations"] == "3100.00"
    assert plan["expectedIncome"] == "4000.00"
    assert plan["safeToSpend"] == "900.00"
    assert plan["nextPayday"] == "2026-03-13"
    urgent = {b["name"]: b["isUrgent"] for b in plan["bills"]}
    # today is 2026-03-10
    assert urgent == {"Rent": True, "Electric": False, "Internet": True, "Car Insurance": False}


def test_funding_plan_without_income(client):
    plan = client.get("/api/funding-plan", headers=HEADERS).json()
    assert plan["safeToSpend"] == "0.00"
    assert plan["nextPayday"] is None


def test_urgent_actions(client):
    _seed(client)
    actions = client.get("/api/urgent-actions", headers=HEADERS).json()

    assert [(a["title"], a["urgency"], a["daysUntil"]) for a in actions] == [
        ("INTERNET DUE TODAY", "today", 0),
        ("Car Loan payment due on day 5", "urgent", 26),
        ("Electric coming up in 5 days", "warning", 5),
    ]
    assert actions[0]["amount"] == "80.00"


def test_paid_bills_leave_the_urgent_list(client):
    _seed(client)
    internet = next(b for b in client.get("/api/bills", headers=HEADERS).json() if b["name"] == "Internet")
    client.patch(f"/api/bills/{internet['id']}", json={"isPaid": True}, headers=HEADERS)

    actions = client.get("/api/urgent-actions", headers=HEADERS).json()
    assert [a["title"] for a in actions] == ["Car Loan payment due on day 5", "Electric coming up in 5 days"]


def test_safe_to_spend_summary(client):
    _seed(client)
    data = client.get("/api/safe-to-spend", headers=HEADERS).json()
    assert data == {"safeToSpend": "850.00", "strictEnvelopes": 5, "strictObligations": "2700.00"}


class DownProvider:
    async def _fail(self, user_id):
        raise DataUnavailable("Could not read accounts")

    list_accounts = list_envelopes = list_debts = _fail
    list_unpaid_bills = list_pay_schedules = get_settings = _fail


def test_store_outage_is_a_503(client):
    app.dependency_overrides[get_snapshot_provider] = lambda: DownProvider()

    resp = client.post("/api/safe-to-spend-check", json={"amount": "5"}, headers=HEADERS)
    assert resp.status_code == 503
    assert resp.json() == {"error": "Could not read accounts"}


class EchoClient:
    def __init__(self):
        self.calls = []

    def complete(self, system, message):
        self.calls.append((system, message))
        return "Skip it this week."


class FailingClient:
    def complete(self, system, message):
        raise RuntimeError("quota exceeded")


def test_advisor_unavailable_without_a_key(client):
    app.dependency_overrides[get_advisor_client] = lambda: None
    resp = client.post("/api/advisor", json={"message": "Can I buy a TV?"}, headers=HEADERS)
    assert resp.status_code == 503


def test_advisor_gets_the_users_numbers(client):
    _seed(client)
    echo = EchoClient()
    app.dependency_overrides[get_advisor_client] = lambda: echo

    resp = client.post("/api/advisor", json={"message": "Can I buy a TV?"}, headers=HEADERS)

    assert resp.status_code == 200
    assert resp.json() == {"response": "Skip it this week."}
    system, message = echo.calls[0]
    assert message == "Can I buy a TV?"
    assert "Safe to Spend: $850.00" in system
    assert "Strict Envelopes: 5" in system
    assert "Total Debt: $38,700.00" in system


def test_advisor_failure_is_a_502(client):
    app.dependency_overrides[get_advisor_client] = lambda: FailingClient()
    resp = client.post("/api/advisor", json={"message": "hi"}, headers=HEADERS)
    assert resp.status_code == 502
    assert resp.json() == {"error": "Failed to get advisor response"}


def test_health(client):
    assert client.get("/health").json()["status"] == "ok"
