"""
Per-browser-session presentation state.

Idle -> ScriptLoading -> ScriptReady | ScriptError, and from ScriptReady an
independent VideoLoading -> VideoReady | VideoError sub-state. All mutation
happens on the event loop, so no locking.
"""
import time
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional

from ad_studio.core.domain.entities import AdScript, GeneratedVideo, ProductImage

LOADING_MESSAGES: List[str] = [
    "Warming up the virtual cameras...",
    "Storyboarding your vision...",
    "Setting up the digital lighting...",
    "Directing the AI actors...",
    "Rendering the first cut...",
    "Adding special effects and sound...",
    "Finalizing the masterpiece...",
    "This can take a few minutes, thanks for your patience!",
]

MISSING_IMAGE_MESSAGE = "Please upload a product image first."
MISSING_SCRIPT_MESSAGE = "Cannot generate video without an ad script and product image."


@dataclass
class StudioSession:
    """UI state for one user session"""

    session_id: str
    image: Optional[ProductImage] = None
    description: str = ""
    ad_script: Optional[AdScript] = None
    is_loading: bool = False
    error: Optional[str] = None
    error_retryable: bool = True
    is_video_loading: bool = False
    video: Optional[GeneratedVideo] = None
    video_error: Optional[str] = None
    video_started_at: Optional[float] = None
    video_task: Optional[Any] = None
    script_request: int = 0
    message_interval: float = 5.0
    clock: Callable[[], float] = field(default=time.monotonic, repr=False)

    @property
    def state(self) -> str:
        """Name of the top-level state"""
        if self.is_loading:
            return "script_loading"
        if self.error:
            return "script_error"
        if self.ad_script:
            return "script_ready"
        return "idle"

    @property
    def video_state(self) -> Optional[str]:
        if self.is_video_loading:
            return "video_loading"
        if self.video_error:
            return "video_error"
        if self.video:
            return "video_ready"
        return None

    def select_image(self, image: ProductImage) -> None:
        """Store a new image; any previous script or video no longer applies"""
        self.image = image
        self.reset()

    def begin_script(self, description: str = "") -> bool:
        """Enter ScriptLoading. Returns False when there is no image to work from."""
        if not self.image:
            self.error = MISSING_IMAGE_MESSAGE
            self.error_retryable = False
            return False

        # A new script replaces the one any running video was made from
        self.clear_video()
        self.script_request += 1
        self.description = description or ""
        self.is_loading = True
        self.error = None
        self.ad_script = None
        return True

    def script_succeeded(self, ad_script: AdScript) -> None:
        self.ad_script = ad_script
        self.is_loading = False

    def script_failed(self, message: str, retryable: bool = True) -> None:
        self.error = message
        self.error_retryable = retryable
        self.is_loading = False

    def begin_video(self) -> bool:
        """
        Enter VideoLoading. Returns False when the request is refused, either
        because there is no script/image or a video is already in flight.
        """
        if self.is_video_loading:
            return False

        if not self.ad_script or not self.image:
            self.video_error = MISSING_SCRIPT_MESSAGE
            return False

        self.is_video_loading = True
        self.video_error = None
        self.video = None
        self.video_started_at = self.clock()
        return True

    def video_succeeded(self, video: GeneratedVideo) -> None:
        self.video = video
        self._finish_video()

    def video_failed(self, message: str) -> None:
        self.video_error = message
        self._finish_video()

    def _finish_video(self) -> None:
        self.is_video_loading = False
        self.video_started_at = None
        self.video_task = None

    def loading_message(self, now: Optional[float] = None) -> Optional[str]:
        """Rotating status text while a video is being generated"""
        if not self.is_video_loading or self.video_started_at is None:
            return None

        elapsed = max(0.0, (now if now is not None else self.clock()) - self.video_started_at)
        index = int(elapsed // self.message_interval) % len(LOADING_MESSAGES)
        return LOADING_MESSAGES[index]

    def reset(self) -> None:
        """Soft reset: clear script and video state, keep the selected image"""
        self.clear_video()
        self.script_request += 1
        self.description = ""
        self.ad_script = None
        self.error = None
        self.error_retryable = True
        self.is_loading = False

    def hard_reset(self) -> None:
        """Soft reset that also discards the selected image"""
        self.reset()
        self.image = None

    def cancel_video(self) -> None:
        if self.video_task is not None and not self.video_task.done():
            self.video_task.cancel()
        self.video_task = None

    def clear_video(self) -> None:
        """Cancel any running video and forget the previous result"""
        self.cancel_video()
        self.video = None
        self.video_error = None
        self.is_video_loading = False
        self.video_started_at = None
