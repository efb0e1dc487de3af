"""
Strict parsing of the script model's JSON output.

The model is constrained to a response schema, so anything that is not valid
JSON matching that schema is treated as a failed generation rather than
repaired.
"""
import json
import logging
from typing import List
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ad_studio.core.domain.entities import AdScript, Scene
from ad_studio.core.domain.errors import GenerationFailedError

logger = logging.getLogger(__name__)


class SceneData(BaseModel):
    """Pydantic model for one scene in the model response"""
    model_config = ConfigDict(populate_by_name=True)

    scene_number: int = Field(..., alias="sceneNumber")
    setting: str
    action: str
    dialogue: str
    sound: str


class AdScriptData(BaseModel):
    """Pydantic model for ad script validation"""
    title: str
    tagline: str
    scenes: List[SceneData]

    def to_entity(self) -> AdScript:
        return AdScript(
            title=self.title,
            tagline=self.tagline,
            scenes=[
                Scene(
                    scene_number=scene.scene_number,
                    setting=scene.setting,
                    action=scene.action,
                    dialogue=scene.dialogue,
                    sound=scene.sound
                )
                for scene in self.scenes
            ]
        )


def parse_ad_script(response_text: str) -> AdScript:
    """
    Parse and validate the model's JSON text into an AdScript.
    Scene order is kept exactly as returned.
    Raises GenerationFailedError on malformed or incomplete output.
    """
    if not response_text:
        logger.error("Empty script response")
        raise GenerationFailedError()

    json_text = response_text.strip()

    try:
        data = json.loads(json_text)
        script = AdScriptData.model_validate(data)
    except json.JSONDecodeError as e:
        logger.error("Script response is not valid JSON", extra={
            "error": str(e),
            "response_preview": json_text[:300]
        })
        raise GenerationFailedError() from e
    except ValidationError as e:
        logger.error("Script response does not match schema", extra={
            "error_count": e.error_count(),
            "response_preview": json_text[:300]
        })
        raise GenerationFailedError() from e

    return script.to_entity()
