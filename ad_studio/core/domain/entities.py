import re
from dataclasses import dataclass, field
from typing import List, Optional

@dataclass
class Scene:
    """One beat of the commercial"""
    scene_number: int
    setting: str
    action: str
    dialogue: str
    sound: str

    def to_dict(self) -> dict:
        """Convert to the provider's camelCase shape"""
        return {
            "sceneNumber": self.scene_number,
            "setting": self.setting,
            "action": self.action,
            "dialogue": self.dialogue,
            "sound": self.sound
        }

@dataclass
class AdScript:
    """Generated commercial script domain entity"""
    title: str
    tagline: str
    scenes: List[Scene] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to dictionary for API response"""
        return {
            "title": self.title,
            "tagline": self.tagline,
            "scenes": [scene.to_dict() for scene in self.scenes]
        }

    def key_visuals(self) -> str:
        """Scene actions joined in order, used as the video prompt's visuals"""
        return ". ".join(scene.action for scene in self.scenes)

    def to_text(self) -> str:
        """Plain-text form of the script for copying"""
        text = f"Title: {self.title}\n"
        text += f"Tagline: {self.tagline}\n\n"
        text += "--- SCRIPT ---\n\n"

        for scene in self.scenes:
            text += f"SCENE {scene.scene_number}\n"
            text += f"SETTING: {scene.setting}\n"
            text += f"ACTION: {scene.action}\n"
            text += f"DIALOGUE: {scene.dialogue}\n"
            text += f"SOUND: {scene.sound}\n\n"

        return text

    def video_filename(self) -> str:
        """Download name for the rendered ad, whitespace in the title replaced by dashes"""
        slug = re.sub(r"\s+", "-", self.title)
        return f"ad-video-{slug}.mp4"

@dataclass
class ProductImage:
    """Uploaded product image"""
    data: bytes
    mime_type: str
    filename: Optional[str] = None

    @property
    def size_bytes(self) -> int:
        return len(self.data)

@dataclass
class GeneratedVideo:
    """Generated video domain entity"""
    uri: str
    filename: str
