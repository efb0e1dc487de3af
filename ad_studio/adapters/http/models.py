from pydantic import BaseModel, Field
from typing import List, Optional
from ad_studio.core.domain.entities import AdScript
from ad_studio.core.domain.session import StudioSession

class ScriptRequestModel(BaseModel):
    """HTTP request model for script generation"""
    description: Optional[str] = Field("", description="Optional product description")

class ResetRequestModel(BaseModel):
    """HTTP request model for resetting the session"""
    hard: bool = Field(False, description="Also discard the selected image")

class SceneModel(BaseModel):
    scene_number: int
    setting: str
    action: str
    dialogue: str
    sound: str

class AdScriptModel(BaseModel):
    """HTTP response model for a generated script"""
    title: str
    tagline: str
    scenes: List[SceneModel]

    @classmethod
    def from_entity(cls, ad_script: AdScript) -> "AdScriptModel":
        return cls(
            title=ad_script.title,
            tagline=ad_script.tagline,
            scenes=[
                SceneModel(
                    scene_number=scene.scene_number,
                    setting=scene.setting,
                    action=scene.action,
                    dialogue=scene.dialogue,
                    sound=scene.sound
                )
                for scene in ad_script.scenes
            ]
        )

class SessionViewModel(BaseModel):
    """HTTP response model describing everything the page renders"""
    state: str
    video_state: Optional[str] = None
    has_image: bool
    image_url: Optional[str] = None
    description: str = ""
    ad_script: Optional[AdScriptModel] = None
    is_loading: bool
    error: Optional[str] = None
    error_retryable: bool = True
    is_video_loading: bool
    video_loading_message: Optional[str] = None
    video_url: Optional[str] = None
    video_filename: Optional[str] = None
    video_error: Optional[str] = None

    @classmethod
    def from_session(cls, session: StudioSession) -> "SessionViewModel":
        return cls(
            state=session.state,
            video_state=session.video_state,
            has_image=session.image is not None,
            image_url="/session/image" if session.image else None,
            description=session.description,
            ad_script=AdScriptModel.from_entity(session.ad_script) if session.ad_script else None,
            is_loading=session.is_loading,
            error=session.error,
            error_retryable=session.error_retryable,
            is_video_loading=session.is_video_loading,
            video_loading_message=session.loading_message(),
            video_url="/session/video" if session.video else None,
            video_filename=session.video.filename if session.video else None,
            video_error=session.video_error
        )
