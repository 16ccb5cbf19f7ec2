from typing import List, Optional

from sqlalchemy import case
from sqlalchemy.orm import Session

from mentorhub.models.goal import Goal

# high > medium > low
_PRIORITY_RANK = case(
    (Goal.priority == "high", 3),
    (Goal.priority == "medium", 2),
    (Goal.priority == "low", 1),
    else_=0,
)


def get_goal(db: Session, goal_id: str) -> Optional[Goal]:
    return db.query(Goal).filter(Goal.id == goal_id).first()


def list_goals_for_user(
    db: Session,
    user_id: str,
    *,
    status: Optional[str] = None,
    category: Optional[str] = None,
    limit: int = 50,
    offset: int = 0,
) -> List[Goal]:
    query = db.query(Goal).filter(Goal.user_id == user_id)

    if status:
        query = query.filter(Goal.status == status)
    if category:
        query = query.filter(Goal.category == category)

    return (
        query.order_by(_PRIORITY_RANK.desc(), Goal.created_at.desc(), Goal.id)
        .limit(limit)
        .offset(offset)
        .all()
    )


def create_goal(
    db: Session,
    *,
    user_id: str,
    title: str,
    category: str,
    description: Optional[str] = None,
    priority: Optional[str] = None,
    progress: Optional[int] = None,
    target_date=None,
) -> Goal:
    goal = Goal(
        user_id=user_id,
        title=title,
        description=description or "",
        category=category,
        priority=priority or "medium",
        status="not-started",
        progress=progress or 0,
        target_date=target_date,
    )
    db.add(goal)
    db.flush()
    return goal


def update_goal(db: Session, goal: Goal, **fields) -> Goal:
    for key, value in fields.items():
        setattr(goal, key, value)
    db.flush()
    return goal


def delete_goal(db: Session, goal: Goal) -> None:
    db.delete(goal)
    db.flush()
