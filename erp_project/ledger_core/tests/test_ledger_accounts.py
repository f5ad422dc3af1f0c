import pytest

from ledger_core.services.ledger_accounts import (FLOW_PAYABLE, FLOW_RECEIVABLE,
                                                  account_name,
                                                  resolve_accounts)


@pytest.mark.parametrize(
    "method, flow, debit, credit",
    [
        ("cash", FLOW_RECEIVABLE, "1011", "1212"),
        ("bank_transfer", FLOW_RECEIVABLE, "1041", "1212"),
        ("cheque", FLOW_RECEIVABLE, "1041", "1212"),
        ("card", FLOW_RECEIVABLE, "1042", "1212"),
        ("cash", FLOW_PAYABLE, "4212", "1011"),
        ("bank_transfer", FLOW_PAYABLE, "4212", "1041"),
        ("cheque", FLOW_PAYABLE, "4212", "1041"),
        ("card", FLOW_PAYABLE, "4212", "1042"),
    ],
)
def test_resolve_accounts_table(method, flow, debit, credit):
    accounts = resolve_accounts(method, flow)
    assert accounts.debit == debit
    assert accounts.credit == credit


def test_unknown_method_books_to_cash_on_hand():
    assert resolve_accounts("other", FLOW_RECEIVABLE) == ("1011", "1212")
    assert resolve_accounts("crypto", FLOW_PAYABLE) == ("4212", "1011")


def test_account_name_known_and_fallback():
    assert account_name("1212").startswith("1212 - Invoices receivable")
    assert account_name("9999") == "9999 - Ledger account"
