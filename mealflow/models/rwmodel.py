from sqlalchemy.orm import DeclarativeBase


class RWModel(DeclarativeBase):
    pass
