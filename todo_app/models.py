from sqlalchemy import Column, Integer, String, Boolean, false

from todo_app.db import Base


class Todo(Base):
    __tablename__ = "todos"
    # SQLite 默认会复用最大 id，AUTOINCREMENT 保证 id 单调递增
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    text = Column(String, nullable=False)
    completed = Column(Boolean, nullable=False, default=False, server_default=false())

    def __repr__(self):
        return f"<Todo {self.id}: {self.text!r} completed={self.completed}>"
