from sqlalchemy import CheckConstraint, Column, Integer, String, DateTime, func
from sqlalchemy.orm import relationship

from cyclestore.db.session import Base


ROLES = ("admin", "user")


class User(Base):
    __tablename__ = "users"
    __table_args__ = (CheckConstraint("role IN ('admin', 'user')", name="ck_users_role"),)

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    name = Column(String(100), nullable=False)
    role = Column(String(20), nullable=False, default="user", server_default="user")
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    # Deleting a user removes everything they own
    products = relationship("Product", back_populates="owner", cascade="all, delete-orphan")
    posts = relationship("BlogPost", back_populates="author", cascade="all, delete-orphan")
