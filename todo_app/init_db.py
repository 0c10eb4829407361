# todo_app/init_db.py
from todo_app.db import Base, engine
from todo_app import models  # noqa: F401  注册模型到 Base.metadata
import logging

logger = logging.getLogger(__name__)


def init_database():
    """初始化数据库表结构"""
    # 创建所有表（如果不存在）
    Base.metadata.create_all(bind=engine)
    logger.info("✅ 数据库表初始化完成")
