import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse

from marathon.api.deps import get_user_repository, optional_principal, sign_in
from marathon.infra.User_Repository import UserRepository, UserExists
from marathon.utilities.security import hash_password, verify_password
from marathon.utilities.validators import RegisterInput, LoginInput

router = APIRouter(prefix="/api/auth")
logger = logging.getLogger(__name__)


def register_user(users: UserRepository, name: str, email: str, password: str):
    """Create an account; raises UserExists when the email is taken."""
    pw_hash, pw_salt = hash_password(password)
    user = users.create_user(name=name, email=email, password_hash=pw_hash, password_salt=pw_salt)
    logger.info("User %s registered", user.id)
    return user


def authenticate(users: UserRepository, email: str, password: str):
    """Return the user for valid credentials, otherwise None."""
    user = users.get_user_by_email(email)
    if user is None or not verify_password(password, user.password_hash, user.password_salt):
        logger.info("Failed login attempt for %s", email)
        return None
    return user


@router.post("/register", status_code=201)
def api_register(payload: RegisterInput, request: Request,
                 users: UserRepository = Depends(get_user_repository)):
    try:
        user = register_user(users, payload.name, payload.email, payload.password)
    except UserExists:
        raise HTTPException(status_code=400, detail="User already exists")
    principal = user.principal()
    sign_in(request, principal)
    return {"user": principal.to_dict()}


@router.post("/login")
def api_login(payload: LoginInput, request: Request,
              users: UserRepository = Depends(get_user_repository)):
    user = authenticate(users, payload.email, payload.password)
    if user is None:
        raise HTTPException(status_code=401, detail="Invalid email or password")
    principal = user.principal()
    sign_in(request, principal)
    return {"user": principal.to_dict()}


@router.post("/logout")
def api_logout(request: Request):
    request.session.clear()
    return {"message": "Logged out successfully"}


@router.get("/user")
def api_current_user(principal=Depends(optional_principal)):
    if principal is None:
        return JSONResponse(status_code=401, content={"message": "Not authenticated"})
    return {"user": principal.to_dict()}
