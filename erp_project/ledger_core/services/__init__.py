from .auth import ensure_authenticated, get_current_user_id
from .ledger_accounts import (FLOW_PAYABLE, FLOW_RECEIVABLE, AccountPair,
                              account_name, resolve_accounts)
from .numbering import next_entry_number
from .payment import (PostingResult, register_bill_payment,
                      register_invoice_payment)
from .posting import build_payment_entry, create_payment_journal
from .transactions import run_in_transaction
from .treasury import record_cash_movement
