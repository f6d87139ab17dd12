"""
User model for authentication and job applications.
"""

from sqlalchemy import Column, String, Text, Boolean, false
from jobly.core.database import Base


class User(Base):
    """
    User account. The username is the stable identity.
    """
    __tablename__ = "users"

    username = Column(String(25), primary_key=True)

    # Authentication credentials (bcrypt hash)
    password = Column(Text, nullable=False)

    # User profile
    first_name = Column(Text, nullable=False)
    last_name = Column(Text, nullable=False)
    email = Column(Text, nullable=False)

    is_admin = Column(Boolean, nullable=False, default=False, server_default=false())

    def __repr__(self):
        return f"<User(username='{self.username}', is_admin={self.is_admin})>"
