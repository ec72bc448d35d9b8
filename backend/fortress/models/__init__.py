from fortress.models.finance import (  # noqa: F401
    AccountType,
    Bill,
    Debt,
    DebtAttackMode,
    Envelope,
    PayFrequency,
    PaySchedule,
    Transaction,
    TransactionType,
    UserSettings,
    VirtualAccount,
)
