"""
User model for authentication.

Admins may create, update, and delete companies and jobs; everyone else
(including anonymous callers) can only read.
"""

from sqlalchemy import Column, String, Text, Boolean
from jobly.core.database import Base


class User(Base):
    """User account; password holds a bcrypt hash, never the plain text"""
    __tablename__ = "users"

    username = Column(String(25), primary_key=True)
    password = Column(Text, nullable=False)
    first_name = Column(Text, nullable=False)
    last_name = Column(Text, nullable=False)
    email = Column(Text, nullable=False)

    # Admin role for protected endpoints
    is_admin = Column(Boolean, nullable=False, default=False)

    def __repr__(self):
        return f"<User(username='{self.username}', is_admin={self.is_admin})>"
