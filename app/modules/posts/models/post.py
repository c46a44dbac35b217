from sqlalchemy import Column, String, DateTime, Text, ForeignKey
from sqlalchemy.sql import func

from app.db.session import Base

class Post(Base):
    __tablename__ = "posts"

    id = Column(String, primary_key=True, index=True)
    post_type = Column(String, index=True, nullable=False)  # code, dance, game, painting, photo, song
    title = Column(String, nullable=False)
    body = Column(Text, nullable=False)
    cover_image_url = Column(String, nullable=True)
    video_url = Column(String, nullable=True)
    code_text = Column(Text, nullable=True)
    code_file_url = Column(String, nullable=True)
    author_id = Column(String, ForeignKey("users.id"))
    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())
