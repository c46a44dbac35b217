from sqlalchemy import Column, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.sql import func

from app.db.session import Base

class Reaction(Base):
    __tablename__ = "reactions"
    __table_args__ = (
        # One reaction per user per post
        UniqueConstraint("user_id", "post_id", "post_type", name="uq_reaction_user_post"),
    )

    id = Column(String, primary_key=True, index=True)
    reaction_type = Column(String, nullable=False)  # like, love, care, angry, sad
    post_type = Column(String, nullable=False)
    post_id = Column(String, ForeignKey("posts.id"), index=True, nullable=False)
    user_id = Column(String, ForeignKey("users.id"), nullable=False)
    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())
