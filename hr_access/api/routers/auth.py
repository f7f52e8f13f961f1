from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm

from hr_access.api.deps import get_current_user
from hr_access.models.auth import Token, UserProfile
from hr_access.services.container import auth_service


router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/token", response_model=Token)
def login_for_access_token(form_data: OAuth2PasswordRequestForm = Depends()) -> Token:
    user = auth_service.authenticate(form_data.username, form_data.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect username or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return auth_service.issue_token(user)


@router.get("/me", response_model=UserProfile)
def read_me(current_user: dict = Depends(get_current_user)) -> UserProfile:
    return auth_service.as_profile(current_user)
