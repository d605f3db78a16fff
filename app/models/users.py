# app/models/users.py
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, Text, DateTime, Uuid
from app.database.database import Base


def utcnow():
    return datetime.now(timezone.utc)


class User(Base):
    __tablename__ = 'users'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    account_number = Column(Text, unique=True, nullable=False)
    ifsc_code = Column(String(11), nullable=False)
    bank_name = Column(Text, nullable=False)
    branch = Column(Text, nullable=False)
    address = Column(Text, nullable=True)
    city = Column(Text, nullable=True)
    state_code = Column(Text, nullable=True)
    routing_no = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    def __repr__(self):
        return f"<User id={self.id} ifsc={self.ifsc_code}>"
