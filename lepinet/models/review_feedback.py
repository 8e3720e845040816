"""
Community feedback on expert reviews: threaded comments and helpful votes.
"""
from sqlalchemy import (
    Column,
    Text,
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    UniqueConstraint,
)

from lepinet.db.database import Base
from lepinet.models.types import new_id, utcnow, uuid_column_type


class ReviewComment(Base):
    """Comments on an expert review; parent_id links a reply to the comment it answers."""

    __tablename__ = "review_comments"

    id = Column(uuid_column_type(), primary_key=True, default=new_id)

    review_id = Column(
        uuid_column_type(), ForeignKey("expert_reviews.id", ondelete="CASCADE"), nullable=False
    )
    author_id = Column(
        uuid_column_type(), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    parent_id = Column(
        uuid_column_type(), ForeignKey("review_comments.id", ondelete="CASCADE"), nullable=True
    )

    content = Column(Text, nullable=False)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    __table_args__ = (
        Index("idx_review_comments_review_id", "review_id", "created_at"),
    )

    def __repr__(self):
        return f"<ReviewComment(id={self.id}, review_id={self.review_id})>"


class ReviewRating(Base):
    """
    Helpful votes on an expert review.
    One vote per rater per review, enforced by the unique constraint.
    """

    __tablename__ = "review_ratings"

    id = Column(uuid_column_type(), primary_key=True, default=new_id)

    review_id = Column(
        uuid_column_type(), ForeignKey("expert_reviews.id", ondelete="CASCADE"), nullable=False
    )
    rater_id = Column(
        uuid_column_type(), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    is_helpful = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    __table_args__ = (
        UniqueConstraint("review_id", "rater_id", name="uq_review_rating_rater"),
        Index("idx_review_ratings_review_id", "review_id"),
    )

    def __repr__(self):
        return f"<ReviewRating(review_id={self.review_id}, rater_id={self.rater_id})>"
