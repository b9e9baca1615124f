import os
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import create_engine, Column, String, Integer, SmallInteger, Text
from sqlalchemy.engine import URL, make_url
from sqlalchemy.orm import declarative_base, sessionmaker

from loaders.config import (
    DB_ENV_DATABASE, DB_ENV_USERNAME, DB_ENV_PASSWORD, DB_ENV_HOST, DB_ENV_PORT,
    DEFAULT_DB_PORT, DEFAULT_DB_DRIVER, DEFAULT_DB_URL,
    POOL_SIZE, POOL_MAX_OVERFLOW, POOL_TIMEOUT, POOL_RECYCLE,
)


Base = declarative_base()

class ItemString(Base):
    __tablename__ = 'item_strings'

    language = Column(String(16), primary_key=True)
    item_template_id = Column(Integer, primary_key=True, autoincrement=False)
    string = Column(Text, nullable=False)
    tool_tip = Column(Text, nullable=False, default='')


class ItemTemplate(Base):
    __tablename__ = 'item_templates'

    item_template_id = Column(Integer, primary_key=True, autoincrement=False)
    icon = Column(String(32))                 # Icon format suffix, e.g. "dds"
    rare_grade = Column(Integer, nullable=False)
    required_level = Column(Integer)
    required_class = Column(String(32))
    required_gender = Column(String(32))
    required_race = Column(String(32))
    tradable = Column(SmallInteger, nullable=False, default=0)
    warehouse_storable = Column(SmallInteger, nullable=False, default=0)


class ItemConversion(Base):
    __tablename__ = 'item_conversions'

    item_template_id = Column(Integer, primary_key=True, autoincrement=False)
    fixed_item_template_id = Column(Integer, primary_key=True, autoincrement=False)
    # '' stands for "any" so the whole natural key can be the primary key
    class_ = Column('class', String(32), primary_key=True, server_default='')
    gender = Column(String(32), primary_key=True, server_default='')
    race = Column(String(32), primary_key=True, server_default='')


@dataclass(frozen=True)
class DatabaseSettings:
    """
    Connection parameters read from DB_DATABASE, DB_USERNAME, DB_PASSWORD,
    DB_HOST and DB_PORT.

    Without DB_DATABASE the local SQLite file is used instead.
    """
    database: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    host: Optional[str] = None
    port: int = DEFAULT_DB_PORT

    @classmethod
    def from_env(cls, environ=None):
        environ = os.environ if environ is None else environ
        return cls(
            database=environ.get(DB_ENV_DATABASE) or None,
            username=environ.get(DB_ENV_USERNAME) or None,
            password=environ.get(DB_ENV_PASSWORD) or None,
            host=environ.get(DB_ENV_HOST) or None,
            port=int(environ.get(DB_ENV_PORT) or DEFAULT_DB_PORT),
        )

    @property
    def url(self):
        if not self.database:
            return make_url(DEFAULT_DB_URL)
        return URL.create(
            DEFAULT_DB_DRIVER,
            username=self.username,
            password=self.password,
            host=self.host,
            port=self.port,
            database=self.database,
        )


def get_engine(db_url=None, **kwargs):
    """
    Create an engine for ``db_url`` (default: from the environment).

    Server databases get the bounded connection pool from loaders.config;
    SQLite keeps SQLAlchemy's defaults.
    """
    url = make_url(db_url) if db_url is not None else DatabaseSettings.from_env().url
    if url.get_backend_name() != 'sqlite':
        kwargs.setdefault('pool_size', POOL_SIZE)
        kwargs.setdefault('max_overflow', POOL_MAX_OVERFLOW)
        kwargs.setdefault('pool_timeout', POOL_TIMEOUT)
        kwargs.setdefault('pool_recycle', POOL_RECYCLE)
        kwargs.setdefault('pool_pre_ping', True)
    return create_engine(url, **kwargs)

def get_session_factory(engine):
    return sessionmaker(bind=engine)
