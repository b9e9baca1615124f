from .database import (
    Base,
    ItemString,
    ItemTemplate,
    ItemConversion,
    DatabaseSettings,
    get_engine,
    get_session_factory,
)
