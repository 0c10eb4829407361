import logging
import os

from dotenv import load_dotenv
from sqlalchemy import create_engine, event
from sqlalchemy.engine import URL, make_url
from sqlalchemy.orm import sessionmaker, declarative_base

load_dotenv()
logger = logging.getLogger(__name__)


def get_database_url() -> str:
    """DATABASE_URL 优先，其次 DB_* 拼 PostgreSQL，最后本地 SQLite"""
    db_url = os.getenv("DATABASE_URL")
    if db_url:
        # Render 的 PostgreSQL URL 可能以 postgres:// 开头
        if db_url.startswith("postgres://"):
            db_url = db_url.replace("postgres://", "postgresql://", 1)
        return db_url

    if os.getenv("DB_HOST"):
        return URL.create(
            "postgresql",
            username=os.getenv("DB_USER", "todouser"),
            password=os.getenv("DB_PASSWORD", "todopassword"),
            host=os.getenv("DB_HOST"),
            port=int(os.getenv("DB_PORT", "5432")),
            database=os.getenv("DB_NAME", "tododb"),
        ).render_as_string(hide_password=False)

    # 本地开发
    return "sqlite:///./todo.db"


DATABASE_URL = get_database_url()
logger.info("当前 DATABASE_URL: %s", make_url(DATABASE_URL).render_as_string(hide_password=True))

engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {},
    pool_pre_ping=True,
)


@event.listens_for(engine, "connect")
def on_connect(dbapi_connection, connection_record):
    logger.debug("Connected to %s database", engine.dialect.name)


SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


# FastAPI 依赖
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def close_engine():
    """关闭连接池，应用退出时调用"""
    engine.dispose()
    logger.info("数据库连接池已关闭")
