"""Utility for resolving account names to IDs."""

from bankroll.domain.account import AccountService
from bankroll.domain.errors import NotFoundError, ValidationError, account_not_found


def resolve_account(account_service: AccountService, account: str | int) -> int:
    """Resolve account name or ID to account ID.

    Numeric values are treated as IDs. Anything else is matched against
    account names across all platforms.

    Args:
        account_service: AccountService instance
        account: Account name (str) or ID (int or string representation of int)

    Returns:
        Account ID

    Raises:
        NotFoundError: If account is not found
        ValidationError: If the name matches accounts on more than one platform
    """
    try:
        account_id = int(account)
    except (ValueError, TypeError):
        account_id = None

    if account_id is not None:
        if account_service.get_account(account_id) is None:
            raise NotFoundError(account_not_found(account_id))
        return account_id

    matches = [acc for acc in account_service.list_accounts() if acc.name == account]
    if not matches:
        raise NotFoundError(f"Account '{account}' not found")
    if len(matches) > 1:
        platforms = ", ".join(acc.platform for acc in matches)
        raise ValidationError(
            f"Account name '{account}' is used on several platforms ({platforms}); use the account ID"
        )
    return matches[0].id
