# mentorhub/api/review.py
"""
Review & Rating API Router

Endpoints:
- POST /api/reviews - Review another participant of a session
- GET /api/reviews - List reviews (sessionId, revieweeId, reviewerId)
- GET /api/reviews/{review_id} - Single review
- DELETE /api/reviews/{review_id} - Delete a review (author or admin)
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from mentorhub.crud import review as review_crud
from mentorhub.crud import session as session_crud
from mentorhub.crud import user as user_crud
from mentorhub.database import get_db
from mentorhub.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError
from mentorhub.models.user import User
from mentorhub.schemas import ReviewCreate, ReviewResponse
from mentorhub.utils.pagination import clamp_pagination
from mentorhub.utils.response import success_response
from mentorhub.utils.security import get_current_user, is_owner_or_admin

router = APIRouter(prefix="/reviews", tags=["reviews"])

DUPLICATE_REVIEW = "Você já avaliou este usuário nesta sessão"


# ======================
# SUBMIT REVIEW
# ======================
@router.post("", status_code=status.HTTP_201_CREATED)
def submit_review(
    review: ReviewCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Submit a review for a session.

    Requirements:
    - Session must exist
    - Reviewer and reviewee must differ
    - One review per (session, reviewer, reviewee)
    - Ratings 1-5
    """
    if session_crud.get_session(db, review.session_id) is None:
        raise NotFoundError("Sessão não encontrada")

    if review.reviewee_id == current_user.id:
        raise ValidationError("Você não pode avaliar a si mesmo")

    if user_crud.get_user(db, review.reviewee_id) is None:
        raise NotFoundError("Usuário não encontrado")

    if review_crud.get_existing_review(db, review.session_id, current_user.id, review.reviewee_id):
        raise ConflictError(DUPLICATE_REVIEW)

    try:
        created = review_crud.create_review(
            db,
            session_id=review.session_id,
            reviewer_id=current_user.id,
            reviewee_id=review.reviewee_id,
            rating=review.rating,
            comment=review.comment,
            communication=review.communication,
            expertise=review.expertise,
            helpfulness=review.helpfulness,
            punctuality=review.punctuality,
        )
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError(DUPLICATE_REVIEW)

    db.refresh(created)
    return success_response(ReviewResponse.model_validate(created), message="Avaliação enviada com sucesso")


# ======================
# GET REVIEWS
# ======================
@router.get("")
def list_reviews(
    session_id: Annotated[Optional[str], Query(alias="sessionId")] = None,
    reviewee_id: Annotated[Optional[str], Query(alias="revieweeId")] = None,
    reviewer_id: Annotated[Optional[str], Query(alias="reviewerId")] = None,
    limit: Optional[int] = None,
    offset: Optional[int] = None,
    db: Session = Depends(get_db),
):
    limit, offset = clamp_pagination(limit, offset)
    reviews = review_crud.list_reviews(
        db,
        session_id=session_id,
        reviewee_id=reviewee_id,
        reviewer_id=reviewer_id,
        limit=limit,
        offset=offset,
    )
    data = [ReviewResponse.model_validate(r) for r in reviews]

    extra = {"count": len(data)}
    if reviewee_id:
        extra["averageRating"] = review_crud.average_rating_for_user(db, reviewee_id)
    return success_response(data, **extra)


@router.get("/{review_id}")
def get_review(review_id: str, db: Session = Depends(get_db)):
    review = review_crud.get_review(db, review_id)
    if review is None:
        raise NotFoundError("Avaliação não encontrada")
    return success_response(ReviewResponse.model_validate(review))


# ======================
# DELETE REVIEW
# ======================
@router.delete("/{review_id}")
def delete_review(
    review_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    review = review_crud.get_review(db, review_id)
    if review is None:
        raise NotFoundError("Avaliação não encontrada")
    if not is_owner_or_admin(current_user, review.reviewer_id):
        raise AuthorizationError("Sem permissão")

    review_crud.delete_review(db, review)
    db.commit()
    return success_response({"reviewId": review_id}, message="Avaliação deletada com sucesso")
