from .categories import CategoriesDataAccess
from .transactions import TransactionsDataAccess
