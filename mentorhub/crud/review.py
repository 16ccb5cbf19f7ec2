# mentorhub/crud/review.py
"""
Review CRUD Operations
Core database operations for session reviews
"""

from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from mentorhub.models.review import Review


# ======================
# REVIEW CRUD
# ======================

def create_review(
    db: Session,
    *,
    session_id: str,
    reviewer_id: str,
    reviewee_id: str,
    rating: int,
    comment: Optional[str] = None,
    communication: Optional[int] = None,
    expertise: Optional[int] = None,
    helpfulness: Optional[int] = None,
    punctuality: Optional[int] = None,
) -> Review:
    """
    Create a new review for a session.

    Args:
        db: Database session
        session_id: Session identifier
        reviewer_id: User writing the review
        reviewee_id: User being reviewed
        rating: Overall rating (1-5)
        comment: Optional text comment

    Returns:
        Created Review object

    Raises:
        IntegrityError: If the rating falls outside 1-5 (table check constraint)
    """
    review = Review(
        session_id=session_id,
        reviewer_id=reviewer_id,
        reviewee_id=reviewee_id,
        rating=rating,
        comment=comment,
        communication=communication,
        expertise=expertise,
        helpfulness=helpfulness,
        punctuality=punctuality,
    )

    db.add(review)
    db.flush()
    return review


def get_review(db: Session, review_id: str) -> Optional[Review]:
    """
    Get a review by its ID.

    Args:
        db: Database session
        review_id: Review identifier

    Returns:
        Review object or None if not found
    """
    return db.query(Review).filter(Review.id == review_id).first()


def get_existing_review(
    db: Session, session_id: str, reviewer_id: str, reviewee_id: str
) -> Optional[Review]:
    return db.query(Review).filter(
        Review.session_id == session_id,
        Review.reviewer_id == reviewer_id,
        Review.reviewee_id == reviewee_id,
    ).first()


def list_reviews(
    db: Session,
    *,
    session_id: Optional[str] = None,
    reviewee_id: Optional[str] = None,
    reviewer_id: Optional[str] = None,
    limit: int = 50,
    offset: int = 0,
) -> List[Review]:
    query = db.query(Review)

    if session_id:
        query = query.filter(Review.session_id == session_id)
    if reviewee_id:
        query = query.filter(Review.reviewee_id == reviewee_id)
    if reviewer_id:
        query = query.filter(Review.reviewer_id == reviewer_id)

    return (
        query.order_by(Review.created_at.desc())
        .limit(limit)
        .offset(offset)
        .all()
    )


def average_rating_for_user(db: Session, reviewee_id: str) -> Optional[float]:
    """
    Mean overall rating received by a user.

    Args:
        db: Database session
        reviewee_id: User identifier

    Returns:
        Average rounded to 2 decimals, or None when the user has no reviews
    """
    avg = db.query(func.avg(Review.rating)).filter(
        Review.reviewee_id == reviewee_id
    ).scalar()
    return round(float(avg), 2) if avg is not None else None


def delete_review(db: Session, review: Review) -> None:
    db.delete(review)
    db.flush()
