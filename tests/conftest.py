import io
import json
from types import SimpleNamespace

import pytest
from PIL import Image

from ad_studio.core.domain.entities import AdScript, ProductImage, Scene


HEADPHONES_SCRIPT = {
    "title": "Unleash the Sound",
    "tagline": "Your World, Your Music.",
    "scenes": [
        {
            "sceneNumber": 1,
            "setting": "A crowded subway car at rush hour.",
            "action": "A commuter slips on the headphones and the noise melts away",
            "dialogue": "None",
            "sound": "Muffled train noise fading into a bass line."
        },
        {
            "sceneNumber": 2,
            "setting": "A vibrant, sunlit city park.",
            "action": "She jogs past fountains, perfectly in rhythm",
            "dialogue": "VO: Twenty hours of pure focus.",
            "sound": "Upbeat electronic track."
        },
        {
            "sceneNumber": 3,
            "setting": "Product shot on a white backdrop.",
            "action": "The headphones rotate slowly under studio light",
            "dialogue": "VO: Unleash the sound.",
            "sound": "Final chord."
        }
    ]
}


class ProviderError(Exception):
    """Stand-in for google.genai.errors.APIError"""

    def __init__(self, message, code=None, status=None):
        super().__init__(message)
        self.code = code
        self.status = status


class FakeModels:
    def __init__(self):
        self.generate_content_calls = []
        self.generate_videos_calls = []
        self.content_response = None
        self.content_error = None
        self.video_operation = SimpleNamespace(done=False, response=None)
        self.video_error = None

    async def generate_content(self, **kwargs):
        self.generate_content_calls.append(kwargs)
        if self.content_error:
            raise self.content_error
        return self.content_response

    async def generate_videos(self, **kwargs):
        self.generate_videos_calls.append(kwargs)
        if self.video_error:
            raise self.video_error
        return self.video_operation


class FakeOperations:
    def __init__(self):
        self.results = []
        self.calls = []

    async def get(self, operation):
        self.calls.append(operation)
        result = self.results.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


class FakeGenaiClient:
    """Mimics the async surface of google.genai.Client"""

    def __init__(self):
        self.aio = SimpleNamespace(models=FakeModels(), operations=FakeOperations())


class RecordingSleep:
    def __init__(self):
        self.calls = []

    async def __call__(self, seconds):
        self.calls.append(seconds)


def pending_operation():
    return SimpleNamespace(done=False, response=None)


def finished_operation(uri="https://generativelanguage.googleapis.com/v1beta/files/abc:download?alt=media"):
    video = SimpleNamespace(uri=uri)
    return SimpleNamespace(
        done=True,
        response=SimpleNamespace(generated_videos=[SimpleNamespace(video=video)])
    )


@pytest.fixture
def script_payload():
    return json.loads(json.dumps(HEADPHONES_SCRIPT))


@pytest.fixture
def ad_script():
    return AdScript(
        title=HEADPHONES_SCRIPT["title"],
        tagline=HEADPHONES_SCRIPT["tagline"],
        scenes=[
            Scene(
                scene_number=s["sceneNumber"],
                setting=s["setting"],
                action=s["action"],
                dialogue=s["dialogue"],
                sound=s["sound"]
            )
            for s in HEADPHONES_SCRIPT["scenes"]
        ]
    )


@pytest.fixture
def png_bytes():
    buffer = io.BytesIO()
    Image.new("RGB", (8, 8), color=(124, 58, 237)).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def product_image(png_bytes):
    return ProductImage(data=png_bytes, mime_type="image/png", filename="headphones.png")


@pytest.fixture
def genai_client():
    return FakeGenaiClient()


@pytest.fixture
def recording_sleep():
    return RecordingSleep()
