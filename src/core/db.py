from sqlmodel import Session, create_engine, select

from core import constants
from core.config import settings
from core.security import hash_password
from models.book import Book
from models.user import User


def build_engine(
    database_uri: str,
    statement_timeout_seconds: float = settings.REQUEST_TIMEOUT_SECONDS,
):
    connect_args = {}
    if database_uri.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    elif database_uri.startswith("postgresql"):
        # a statement cannot outlive the request that issued it
        timeout_ms = int(statement_timeout_seconds * 1000)
        connect_args["options"] = f"-c statement_timeout={timeout_ms}"
    return create_engine(database_uri, pool_pre_ping=True, connect_args=connect_args)


# one pool per process, handed to requests through api.api_v1.deps
engine = build_engine(str(settings.SQLALCHEMY_DATABASE_URI))


# make sure all SQLModel models are imported (models) before initializing DB
# otherwise, SQLModel might fail to initialize relationships properly
# for more details: https://github.com/tiangolo/full-stack-fastapi-postgresql/issues/28


def seed_admin(session: Session, password: str = "admin123"):
    existing_admin = session.exec(
        select(User).where(User.email == "admin@betareader.com")
    ).first()
    if existing_admin:
        return existing_admin

    admin = User(
        name="Admin",
        email="admin@betareader.com",
        phone="(11) 99999-9999",
        password_hash=hash_password(password),
        level=constants.ADMIN_LEVEL,
        points=10000,
        balance=100000,
        plan_type=constants.PlanType.PREMIUM,
        is_admin=True,
        onboarding_completed=True,
        commitment=constants.Commitment.COMMITTED,
        income_range=constants.IncomeRange.HIGH,
    )
    session.add(admin)
    session.commit()
    return admin


def seed_books(session: Session):
    books = [
        Book(
            title="As Sombras de Eldoria",
            author="Marina Silvestre",
            genre="Fantasia Épica",
            synopsis="Em um reino onde a magia está desaparecendo, uma jovem escriba descobre um antigo segredo que pode salvar ou destruir tudo o que conhece.",
            content="O vento sussurrava segredos antigos através das torres de cristal de Eldoria, carregando consigo o aroma de pergaminhos envelhecidos e a promessa de tempestades distantes...",
            base_reward_money=500,
            reward_points=50,
            word_count=2000,
            page_count=8,
            estimated_read_time=480,
            is_initial_book=True,
        ),
        Book(
            title="Código Vermelho",
            author="Alexandre Ferreira",
            genre="Thriller Tecnológico",
            synopsis="Um thriller envolvente sobre hackers e conspirações corporativas em um mundo digital perigoso.",
            content="A tela piscava intermitentemente no porão escuro, refletindo o rosto tenso de Marcus enquanto seus dedos voavam sobre o teclado...",
            base_reward_money=500,
            reward_points=50,
            word_count=1800,
            page_count=7,
            estimated_read_time=420,
            is_initial_book=True,
        ),
        Book(
            title="O Jardim das Memórias Perdidas",
            author="Clara Monteiro",
            genre="Romance Contemporâneo",
            synopsis="Uma história tocante sobre amor, perda e a força das lembranças em tempos difíceis.",
            content="O perfume das rosas ainda pairava no ar quando Elena encontrou o diário escondido entre os livros da avó...",
            base_reward_money=500,
            reward_points=50,
            word_count=2200,
            page_count=9,
            estimated_read_time=540,
            is_initial_book=True,
        ),
        Book(
            title="O Último Detetive de Baker Street",
            author="Eduardo Santos",
            genre="Mistério Urbano",
            synopsis="Mistérios sombrios nas ruas de Londres com um detetive excepcional.",
            content="A névoa londrina envolveu Baker Street como um manto cinzento quando o último detetive da linhagem Holmes recebeu um caso que mudaria tudo...",
            base_reward_money=800,
            reward_points=80,
            required_level=1,
            word_count=3500,
            page_count=15,
            estimated_read_time=840,
            is_initial_book=False,
        ),
    ]

    for book in books:
        existing_book = session.exec(
            select(Book).where(Book.title == book.title)
        ).first()
        if not existing_book:
            session.add(book)

    session.commit()


def init_db(session: Session) -> None:
    # Tables are created by the alembic migrations
    seed_admin(session)
    seed_books(session)
