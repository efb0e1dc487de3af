from abc import ABC, abstractmethod
from ad_studio.core.domain.entities import AdScript, GeneratedVideo, ProductImage

class AdScriptUseCasePort(ABC):
    """Port for ad script use case"""

    @abstractmethod
    async def generate_script(self, image: ProductImage, product_description: str = "") -> AdScript:
        """Generate an ad script"""
        pass

class AdVideoUseCasePort(ABC):
    """Port for ad video use case"""

    @abstractmethod
    async def generate_video(self, ad_script: AdScript, image: ProductImage) -> GeneratedVideo:
        """Generate a video ad for a script"""
        pass

class VideoDownloadUseCasePort(ABC):
    """Port for video download use case"""

    @abstractmethod
    async def download_video(self, video: GeneratedVideo) -> bytes:
        """Download a generated video"""
        pass
