from abc import ABC, abstractmethod
from ad_studio.core.domain.entities import AdScript, ProductImage

class ScriptGenerationPort(ABC):
    """Port for ad script generation"""

    @abstractmethod
    async def generate_ad_script(self, image: ProductImage, product_description: str = "") -> AdScript:
        """Generate an ad script from a product image and optional description"""
        pass

class VideoGenerationPort(ABC):
    """Port for video generation"""

    @abstractmethod
    async def generate_video(self, prompt: str, image: ProductImage) -> str:
        """Generate a video and return its credentialed download URI"""
        pass

    @abstractmethod
    async def download_video(self, uri: str) -> bytes:
        """Download video content"""
        pass
