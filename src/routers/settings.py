from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List, Optional

from src.crud import crud_setting
from src.models import setting as setting_models
from src.db.core import get_db, NotFoundError, SettingDataType
from src.deps import get_current_user_id

router = APIRouter(
    prefix="/settings",
    tags=["settings"],
)

@router.get("/", response_model=setting_models.SettingPage)
def read_settings(
    setting_key: Optional[str] = None,
    data_type: Optional[SettingDataType] = None,
    search: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    """
    Retrieve a page of settings with the total count and whether more remain.
    """
    return crud_setting.read_db_settings(
        db=db, user_id=user_id, setting_key=setting_key, data_type=data_type,
        search=search, page=page, limit=limit
    )

@router.get("/by-type/{data_type}", response_model=List[setting_models.SettingResponse])
def read_settings_by_type(
    data_type: SettingDataType,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    return crud_setting.read_db_settings_by_type(db=db, user_id=user_id, data_type=data_type)

@router.get("/key/{setting_key}", response_model=Optional[setting_models.SettingResponse])
def read_setting_by_key(
    setting_key: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    """
    Retrieve a setting by key, or null when it has never been set.
    """
    return crud_setting.read_db_setting_by_key(db=db, user_id=user_id, setting_key=setting_key)

@router.put("/key/{setting_key}", response_model=setting_models.SettingResponse)
def update_setting_by_key(
    setting_key: str,
    setting: setting_models.SettingValueUpdate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    try:
        return crud_setting.update_db_setting_by_key(db=db, user_id=user_id, setting_key=setting_key, setting_updates=setting)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

@router.delete("/key/{setting_key}", status_code=status.HTTP_204_NO_CONTENT)
def delete_setting_by_key(
    setting_key: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    try:
        crud_setting.delete_db_setting_by_key(db=db, user_id=user_id, setting_key=setting_key)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

@router.get("/{setting_id}", response_model=setting_models.SettingResponse)
def read_setting(
    setting_id: int,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    db_setting = crud_setting.read_db_setting(db=db, setting_id=setting_id, user_id=user_id)
    if db_setting is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Setting not found")
    return db_setting

@router.post("/", response_model=setting_models.SettingResponse, status_code=status.HTTP_201_CREATED)
def create_setting(
    setting: setting_models.SettingCreate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    try:
        return crud_setting.create_db_setting(db=db, user_id=user_id, setting_data=setting)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

@router.put("/{setting_id}", response_model=setting_models.SettingResponse)
def update_setting(
    setting_id: int,
    setting: setting_models.SettingUpdate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    try:
        return crud_setting.update_db_setting(db=db, setting_id=setting_id, user_id=user_id, setting_updates=setting)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

@router.delete("/{setting_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_setting(
    setting_id: int,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    try:
        crud_setting.delete_db_setting(db=db, setting_id=setting_id, user_id=user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
