from enum import Enum


class PlanType(str, Enum):
    FREE = "FREE"
    PREMIUM = "PREMIUM"


class Commitment(str, Enum):
    COMMITTED = "COMMITTED"
    CURIOUS = "CURIOUS"


class IncomeRange(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    UNEMPLOYED = "UNEMPLOYED"


class SessionDecision(str, Enum):
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class TransactionType(str, Enum):
    EARNING = "EARNING"
    WITHDRAWAL = "WITHDRAWAL"


class TransactionStatus(str, Enum):
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


class WithdrawalStatus(str, Enum):
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


class PixKeyType(str, Enum):
    CPF = "CPF"
    EMAIL = "EMAIL"
    PHONE = "PHONE"
    RANDOM = "RANDOM"


SOURCE_TYPE_READING = "reading"
SOURCE_TYPE_WITHDRAWAL = "withdrawal"

FRAUD_SCORE_MAX = 100
FRAUD_SCORE_MIN = 0

AVERAGE_READING_SPEED = 200  # words per minute, for estimated read time
MIN_PASSWORD_LENGTH = 6
BCRYPT_ROUNDS = 12
LATEST_REVIEWS_LIMIT = 10
ADMIN_LEVEL = 99

DIFFICULTY_BY_LEVEL = {0: "Fácil", 1: "Médio"}
DIFFICULTY_HARD = "Difícil"

# Client-facing messages
MSG_INVALID_DATA = "Dados inválidos"
MSG_INTERNAL_ERROR = "Erro interno do servidor"
MSG_REQUEST_TIMEOUT = "Tempo limite da requisição excedido"
MSG_ROUTE_NOT_FOUND = "Rota não encontrada: {method} {path}"
MSG_INVALID_SESSION = "Sessão de leitura inválida"
MSG_SESSION_FINISHED = "Sessão já foi finalizada"
MSG_SESSION_ALREADY_ACTIVE = "Sessão já estava ativa"
MSG_BOOK_NOT_FOUND = "Livro não encontrado"
MSG_BOOK_UNAVAILABLE = "Livro não está disponível"
MSG_INSUFFICIENT_LEVEL = "Nível insuficiente para acessar este livro"
MSG_REWARD_GRANTED = "Avaliação criada e recompensa processada!"
MSG_READING_TOO_FAST = "Avaliação criada, mas tempo de leitura muito rápido"
MSG_REWARD_ALREADY_RECEIVED = "Avaliação criada, mas recompensa já foi recebida"

MSG_TOKEN_REQUIRED = "Token de acesso requerido"
MSG_TOKEN_EXPIRED = "Token expirado"
MSG_TOKEN_INVALID = "Token inválido"
MSG_USER_NOT_FOUND = "Usuário não encontrado"
MSG_ADMIN_ONLY = "Acesso restrito a administradores"
MSG_ACCOUNT_SUSPENDED = "Conta suspensa: {reason}"
MSG_DEFAULT_SUSPENSION_REASON = "Violação dos termos"
MSG_MISSING_REGISTER_FIELDS = "Todos os campos são obrigatórios"
MSG_SHORT_PASSWORD = "Senha deve ter pelo menos 6 caracteres"
MSG_EMAIL_IN_USE = "Email já está em uso"
MSG_MISSING_LOGIN_FIELDS = "Email e senha são obrigatórios"
MSG_INVALID_CREDENTIALS = "Email ou senha inválidos"
MSG_INVALID_ONBOARDING = "Dados de onboarding inválidos"

MSG_INSUFFICIENT_BALANCE = "Saldo insuficiente"
MSG_MIN_WITHDRAWAL = "Valor mínimo para saque: {amount}"
MSG_WITHDRAWAL_NOT_FOUND = "Saque não encontrado"
MSG_WITHDRAWAL_NOT_PENDING = "Saque não está pendente"
