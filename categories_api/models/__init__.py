from .categories import (
    GLOBAL_USER_ID,
    NO_PARENT,
    UNSET,
    AddCategoryPayload,
    Category,
    CategoryPatch,
    CategoryRefPayload,
    CategoryResponse,
    CategoryType,
    DeleteUserPayload,
    EditCategoryPayload,
    UserCategoriesPayload,
)
from .messages import (
    InboundMessage,
    MessageType,
    OperationResult,
    OutboundMessage,
    ResponseKind,
)
from .transactions import Transaction
