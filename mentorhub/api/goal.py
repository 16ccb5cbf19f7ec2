# mentorhub/api/goal.py
"""
Personal Goals API Router
Every endpoint is scoped to the authenticated user; admins may read and edit any goal by id.
"""

from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from mentorhub.crud import goal as goal_crud
from mentorhub.database import get_db
from mentorhub.exceptions import AuthorizationError, NotFoundError, ValidationError
from mentorhub.models.goal import Goal
from mentorhub.models.user import User
from mentorhub.schemas import GoalCreate, GoalResponse, GoalUpdate
from mentorhub.utils.pagination import clamp_pagination
from mentorhub.utils.response import success_response
from mentorhub.utils.security import get_current_user, is_owner_or_admin

router = APIRouter(prefix="/goals", tags=["goals"])


def _get_owned_goal(db: Session, goal_id: str, current_user: User) -> Goal:
    goal = goal_crud.get_goal(db, goal_id)
    if goal is None:
        raise NotFoundError("Meta não encontrada")
    if not is_owner_or_admin(current_user, goal.user_id):
        raise AuthorizationError("Sem permissão")
    return goal


@router.get("")
def list_goals(
    status: Optional[str] = None,
    category: Optional[str] = None,
    limit: Optional[int] = None,
    offset: Optional[int] = None,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Highest priority first, newest first within a priority"""
    limit, offset = clamp_pagination(limit, offset)
    goals = goal_crud.list_goals_for_user(
        db,
        current_user.id,
        status=status,
        category=category,
        limit=limit,
        offset=offset,
    )
    data = [GoalResponse.model_validate(g) for g in goals]
    return success_response(data, count=len(data))


@router.get("/{goal_id}")
def get_goal(
    goal_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    goal = _get_owned_goal(db, goal_id, current_user)
    return success_response(GoalResponse.model_validate(goal))


@router.post("", status_code=status.HTTP_201_CREATED)
def create_goal(
    payload: GoalCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    if not payload.title or not payload.category:
        raise ValidationError("Título e categoria são obrigatórios")

    goal = goal_crud.create_goal(
        db,
        user_id=current_user.id,
        title=payload.title,
        description=payload.description,
        category=payload.category,
        priority=payload.priority,
        progress=payload.progress,
        target_date=payload.target_date,
    )
    db.commit()
    db.refresh(goal)

    return success_response(GoalResponse.model_validate(goal), message="Meta criada com sucesso")


@router.put("/{goal_id}")
def update_goal(
    goal_id: str,
    payload: GoalUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    goal = _get_owned_goal(db, goal_id, current_user)

    fields = payload.model_dump(exclude_unset=True)
    # target_date and description may be cleared; the rest keep their value when null.
    for key in ("title", "category", "priority", "status", "progress"):
        if fields.get(key) is None:
            fields.pop(key, None)

    goal_crud.update_goal(db, goal, **fields)
    db.commit()
    db.refresh(goal)

    return success_response(GoalResponse.model_validate(goal), message="Meta atualizada com sucesso")


@router.delete("/{goal_id}")
def delete_goal(
    goal_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    goal = _get_owned_goal(db, goal_id, current_user)
    goal_crud.delete_goal(db, goal)
    db.commit()
    return success_response({"goalId": goal_id}, message="Meta deletada com sucesso")
