"""FastAPI dependencies: repositories from app state and the signed-in Principal."""
from typing import Optional

from fastapi import Depends, HTTPException, Request

from marathon.domain.User import Principal
from marathon.infra.Plan_Repository import PlanRepository
from marathon.infra.User_Repository import UserRepository

SESSION_USER_KEY = "user_id"


def get_plan_repository(request: Request) -> PlanRepository:
    return request.app.state.plan_repository


def get_user_repository(request: Request) -> UserRepository:
    return request.app.state.user_repository


def optional_principal(request: Request,
                       users: UserRepository = Depends(get_user_repository)) -> Optional[Principal]:
    user_id = request.session.get(SESSION_USER_KEY)
    if not user_id:
        return None
    user = users.get_user(user_id)
    if user is None:
        # Account vanished since the session was issued
        request.session.clear()
        return None
    return user.principal()


def require_principal(principal: Optional[Principal] = Depends(optional_principal)) -> Principal:
    if principal is None:
        raise HTTPException(status_code=401, detail="Authentication required")
    return principal


def sign_in(request: Request, principal: Principal) -> None:
    request.session.clear()
    request.session[SESSION_USER_KEY] = principal.id
