from .auditlog import AuditLog
from .banking import BankAccount, CashMovement
from .bill import Bill, BillPayment
from .customer import Customer
from .entitymembership import Company, EntityMembership
from .invoice import Invoice, InvoicePayment
from .journal import JournalEntry, JournalLine
from .vendor import Vendor
