from sqlalchemy import BigInteger, Integer
from sqlalchemy.orm import DeclarativeBase

# Surrogate key type; SQLite only autoincrements INTEGER PRIMARY KEY columns.
BIGINT = BigInteger().with_variant(Integer, "sqlite")


class Base(DeclarativeBase):
    pass
