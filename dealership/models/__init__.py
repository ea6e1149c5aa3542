# Exposes all models to the app
from .users import User
from .vehicles import Vehicle, VehicleStatus
from .expenses import Vendor, Expense, ExpenseType
from .operations import Transaction, TransactionType
