from ledger.exceptions import ValidationError
from ledger.models import Profile
from ledger.services.cashflow import ExpenseService, IncomeService

SERVICES = {
    "income": IncomeService,
    "expense": ExpenseService,
}


def filter_transactions(
    profile: Profile,
    entry_type: str,
    start_date=None,
    end_date=None,
    keyword=None,
    sort_field=None,
    sort_order=None,
):
    """
    Filter the caller's incomes or expenses.

    Missing bounds default to the earliest entry and today, the keyword to
    empty and the sort to ascending date.
    """
    service = SERVICES.get((entry_type or "").strip().lower())
    if service is None:
        raise ValidationError("Invalid type, must be 'income' or 'expense' only.")
    return service.filter(
        profile,
        start_date=start_date,
        end_date=end_date,
        keyword=keyword or "",
        sort_field=sort_field or "date",
        sort_order=sort_order or "asc",
    )
