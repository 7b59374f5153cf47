from sqlalchemy import Column, Integer
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class BaseModel(Base):
    __abstract__ = True
    id = Column(Integer, primary_key=True, autoincrement=True, index=True)

# Note: Models will import this Base. Do not import models here to avoid circular imports.
# init_db() in app.platform.db.session imports them before create_all.
