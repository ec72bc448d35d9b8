import logging
from typing import Optional, Protocol

import google.generativeai as genai

from fortress.core.config import settings
from fortress.core.errors import AdvisorFailed, AdvisorUnavailable
from fortress.core.money import ZERO, fmt, total
from fortress.core.snapshot import Snapshot
from fortress.models.finance import AccountType

logger = logging.getLogger(__name__)

ADVISOR_RULES = """
RULES:
1. If asked "Can I buy X?", check if the amount fits within the Safe to Spend amount
2. Be honest but encouraging - help them make good decisions
3. If something isn't in the budget, suggest alternatives or ways to afford it
4. Always consider their debt situation when advising on spending
5. Suggest marking business expenses as tax write-offs when appropriate
6. Keep responses concise and actionable
7. Never shame them - be supportive but firm about budget limits
""".strip()


class CompletionClient(Protocol):
    def complete(self, system: str, message: str) -> str: ...


class GeminiClient:
    def __init__(self, api_key: str, model_name: str):
        genai.configure(api_key=api_key)
        self.model = genai.GenerativeModel(model_name)

    def complete(self, system: str, message: str) -> str:
        response = self.model.generate_content([system, message])
        return response.text.strip()


def get_completion_client() -> Optional[CompletionClient]:
    if not settings.GEMINI_API_KEY:
        return None
    return GeminiClient(settings.GEMINI_API_KEY, settings.ADVISOR_MODEL)


def build_advisor_context(snapshot: Snapshot) -> str:
    safe_to_spend = max(ZERO, snapshot.balance_of(AccountType.SPENDING))
    total_debt = total(d.current_balance for d in snapshot.debts)
    strict_count = sum(1 for e in snapshot.envelopes if e.is_strict)

    envelopes = ", ".join(f"{e.name}: {fmt(e.current_balance)} remaining" for e in snapshot.envelopes) or "None set up"
    accounts = ", ".join(f"{a.name}: {fmt(a.balance)}" for a in snapshot.accounts) or "None set up"
    debts = ", ".join(f"{d.name}: {fmt(d.current_balance)}" for d in snapshot.debts) or "No debts tracked"

    return f"""
You are a strict but supportive financial advisor for the Fiscal Fortress app. Your job is to help the user stay on budget and get out of debt.

CURRENT FINANCIAL STATUS:
- Safe to Spend: {fmt(safe_to_spend)}
- Total Debt: {fmt(total_debt)}
- Strict Envelopes: {strict_count} (non-negotiable expenses)
- Budget Envelopes: {envelopes}
- Virtual Accounts: {accounts}
- Debts: {debts}

{ADVISOR_RULES}
""".strip()


def ask_advisor(client: Optional[CompletionClient], snapshot: Snapshot, message: str) -> str:
    if client is None:
        raise AdvisorUnavailable("AI advisor is not available. Please try again later.")

    context = build_advisor_context(snapshot)
    try:
        return client.complete(context, message)
    except Exception as e:
        logger.error("Advisor completion failed for %s: %s", snapshot.user_id, e)
        raise AdvisorFailed("Failed to get advisor response") from e
