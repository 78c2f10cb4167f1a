"""Utility for resolving account references to accounts."""

from minibank.domain.entities import Account
from minibank.domain.registry import AccountRegistry


def resolve_account(registry: AccountRegistry, account: str) -> Account:
    """Resolve an account number or holder name to an account.

    Args:
        registry: AccountRegistry instance
        account: Account number, or a holder's first, last or full name

    Returns:
        The matching account

    Raises:
        ValueError: If no account matches or a name matches several accounts
    """
    reference = str(account).strip()

    if reference.isdigit():
        found = registry.get_account(reference)
        if found is None:
            raise ValueError(f"Account number {reference} not found")
        return found

    matches = registry.find_by_holder(reference)
    if not matches:
        raise ValueError(f"Account '{reference}' not found")
    if len(matches) > 1:
        numbers = ", ".join(acc.account_number for acc in matches)
        raise ValueError(f"Account '{reference}' is ambiguous: {numbers}")
    return matches[0]
