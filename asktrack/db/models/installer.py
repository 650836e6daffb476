from sqlalchemy import Column, Integer, String
from asktrack.db.session import RemkBase

class Installer(RemkBase):
    __tablename__ = "installers"

    id = Column("id", Integer, primary_key=True, index=True)
    name = Column("Int_name", String, nullable=True)
    number = Column("Int_number", String, nullable=True, index=True)
    password = Column("Int_pass", String, nullable=False)  # хэш passlib (старые записи: открытый текст)
    code = Column("Int_code", String, nullable=False)
    type = Column("Int_type", String, nullable=True)
    branch = Column("Int_Branch", String, nullable=True)
    city = Column("Int_City", String, nullable=True)
