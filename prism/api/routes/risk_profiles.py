"""
Risk Profile Routes — read, validate, create, delete and switch the default profile.

  GET    /risk-profiles                   → all profiles, default first
  POST   /risk-profiles                   → create or replace a profile from YAML text
  DELETE /risk-profiles?id=...            → delete a user-created profile
  GET    /risk-profiles/default           → the default profile (null if none)
  GET    /risk-profiles/validate          → validation report
  POST   /risk-profiles/set-default       → make one profile the default
  GET    /risk-profiles/{id}              → one profile
  GET    /risk-profiles/{id}/download     → raw YAML
"""

from __future__ import annotations

import logging

import yaml
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import PlainTextResponse
from pydantic import ValidationError

from prism.api.dependencies import get_profile_store
from prism.models.api_models import CreateProfileRequest, SetDefaultRequest
from prism.models.profile_models import ProfileValidation, RiskProfile
from prism.profiles.errors import (
    InvalidProfileIdError,
    MultipleDefaultProfilesError,
    ProfileConfigurationError,
    ProfileNotFoundError,
    SystemProfileError,
)
from prism.profiles.store import ProfileStore

logger = logging.getLogger("prism.api.profiles")
router = APIRouter(prefix="/risk-profiles", tags=["risk-profiles"])

# Author recorded on uploads that do not name one; only "system" profiles are protected
UPLOAD_AUTHOR = "user"


@router.get("", response_model=list[RiskProfile])
async def list_profiles(store: ProfileStore = Depends(get_profile_store)):
    return store.list_profiles()


@router.post("")
async def create_profile(
    req: CreateProfileRequest,
    store: ProfileStore = Depends(get_profile_store),
):
    """Store a profile uploaded as YAML text under its sanitized id."""
    try:
        data = yaml.safe_load(req.yaml)
    except yaml.YAMLError as e:
        raise HTTPException(status_code=400, detail=f"Invalid YAML: {e}")
    if not isinstance(data, dict):
        raise HTTPException(status_code=400, detail="Profile YAML must be a mapping")

    data.setdefault("created_by", UPLOAD_AUTHOR)
    try:
        profile = RiskProfile.from_yaml_dict(req.id, data)
        profile_id = store.save(profile)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=f"Invalid risk profile: {e}")
    except InvalidProfileIdError:
        raise HTTPException(status_code=400, detail="Invalid profile ID")
    except MultipleDefaultProfilesError as e:
        raise HTTPException(status_code=409, detail=str(e))

    logger.info(f"Risk profile uploaded: {profile_id}")
    return {"success": True, "id": profile_id}


@router.delete("")
async def delete_profile(
    id: str | None = None,
    store: ProfileStore = Depends(get_profile_store),
):
    if not id:
        raise HTTPException(status_code=400, detail="Missing profile id")
    try:
        store.delete(id)
    except InvalidProfileIdError:
        raise HTTPException(status_code=400, detail="Invalid profile ID")
    except ProfileNotFoundError:
        raise HTTPException(status_code=404, detail="Profile not found")
    except SystemProfileError:
        raise HTTPException(status_code=403, detail="Cannot delete system profiles")
    return {"success": True}


@router.get("/default")
async def default_profile(store: ProfileStore = Depends(get_profile_store)):
    """The default profile; ``profile`` is null when none is flagged."""
    try:
        profile = store.load_default()
    except MultipleDefaultProfilesError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return {"profile": profile.model_dump(mode="json") if profile else None}


@router.get("/validate")
async def validate_profiles(store: ProfileStore = Depends(get_profile_store)):
    validation: ProfileValidation = store.validate()
    return {"success": True, "validation": validation.model_dump()}


@router.post("/set-default")
async def set_default_profile(
    req: SetDefaultRequest,
    store: ProfileStore = Depends(get_profile_store),
):
    try:
        profile = store.set_default(req.profile_id)
    except (ProfileNotFoundError, InvalidProfileIdError):
        raise HTTPException(status_code=404, detail="Profile not found")
    except ProfileConfigurationError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return {"message": "Default profile updated successfully", "profileId": profile.id}


@router.get("/{profile_id}", response_model=RiskProfile)
async def get_profile(profile_id: str, store: ProfileStore = Depends(get_profile_store)):
    profile = store.load(profile_id)
    if profile is None:
        raise HTTPException(status_code=404, detail="Profile not found")
    return profile


@router.get("/{profile_id}/download", response_class=PlainTextResponse)
async def download_profile(profile_id: str, store: ProfileStore = Depends(get_profile_store)):
    try:
        content = store.export(profile_id)
    except (ProfileNotFoundError, InvalidProfileIdError):
        raise HTTPException(status_code=404, detail="Profile not found")
    return PlainTextResponse(
        content,
        media_type="text/yaml",
        headers={"Content-Disposition": f'attachment; filename="{profile_id}.yaml"'},
    )
