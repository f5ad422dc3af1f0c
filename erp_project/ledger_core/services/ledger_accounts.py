from typing import NamedTuple

# Direction of the money relative to the company
FLOW_RECEIVABLE = "receivable"  # customer pays us (collection)
FLOW_PAYABLE = "payable"  # we pay a vendor

# Fixed control accounts (PCGE chart)
CASH_ON_HAND = "1011"
OPERATING_CHECKING = "1041"
SPECIAL_PURPOSE_CHECKING = "1042"
ACCOUNTS_RECEIVABLE = "1212"
ACCOUNTS_PAYABLE = "4212"

# Payment method -> cash/bank account that moves
CASH_ACCOUNT_BY_METHOD = {
    "cash": CASH_ON_HAND,
    "bank_transfer": OPERATING_CHECKING,
    "cheque": OPERATING_CHECKING,
    "card": SPECIAL_PURPOSE_CHECKING,
}

ACCOUNT_NAMES = {
    "1011": "1011 - Cash on hand",
    "1012": "1012 - Cash on hand, foreign currency",
    "1041": "1041 - Operating checking accounts",
    "1042": "1042 - Special-purpose checking accounts",
    "1212": "1212 - Invoices receivable - Issued in portfolio",
    "4212": "4212 - Invoices payable - Issued",
}


class AccountPair(NamedTuple):
    debit: str
    credit: str


def cash_account_for(method) -> str:
    """Cash/bank account for a payment method; unknown methods book to cash."""
    return CASH_ACCOUNT_BY_METHOD.get(method, CASH_ACCOUNT_BY_METHOD["cash"])


def resolve_accounts(method, flow) -> AccountPair:
    """
    Accounts to debit and credit for a payment.

    Collections:  Dr cash/bank   Cr accounts receivable
    Payments:     Dr accounts payable   Cr cash/bank
    """
    cash = cash_account_for(method)
    if flow == FLOW_PAYABLE:
        return AccountPair(debit=ACCOUNTS_PAYABLE, credit=cash)
    return AccountPair(debit=cash, credit=ACCOUNTS_RECEIVABLE)


def account_name(code) -> str:
    return ACCOUNT_NAMES.get(code, f"{code} - Ledger account")
