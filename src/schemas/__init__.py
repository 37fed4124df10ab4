from .base import ApiResponse, CamelModel, ErrorResponse, Page
from .user import (
    AuthData,
    LoginRequest,
    OnboardingRequest,
    PublicUser,
    RegisterRequest,
    SuspendUserRequest,
    UserData,
)
from .book import (
    AdminBook,
    BookContent,
    BookCreateRequest,
    BookDetail,
    BookDetailData,
    BookListData,
    BookUpdateRequest,
    PublicBook,
    PublicReview,
    ReviewAuthor,
)
from .reading import (
    CompleteReadingData,
    CompleteReadingRequest,
    FraudVerdict,
    StartReadingData,
)
from .withdrawal import (
    ApproveWithdrawalRequest,
    RejectWithdrawalRequest,
    TransactionOut,
    WithdrawalData,
    WithdrawalOut,
    WithdrawalRequest,
)
