"""
LLM Prompt Templates Configuration

This module contains the prompt templates and the response schema used for
provider interactions. Templates use Python string formatting for dynamic
content injection.
"""

from typing import Any, Dict

NO_DESCRIPTION_FALLBACK = "No description provided. Analyze the image."

class PromptTemplates:
    """Collection of provider prompt templates"""

    # Script generation instruction sent alongside the product image
    AD_SCRIPT_TEMPLATE = """
You are a world-class creative director at a major advertising agency.
Your task is to generate a short, punchy, and visually compelling 30-second commercial script based on the provided product image and description.
The script should be structured, creative, and ready for a production team.
The tone should be energetic and inspiring.
Ensure the output is a valid JSON object matching the provided schema.

Product Description: {product_description}
"""

    # Video generation prompt built from a finished script
    VIDEO_AD_TEMPLATE = """
Create a dynamic, visually stunning 30-second commercial video based on this concept.
Title: {title}
Tagline: {tagline}
Key Visuals: {key_visuals}
The style should be modern, energetic, and cinematic, matching the product in the provided image.
"""

    @classmethod
    def format_ad_script_prompt(cls, product_description: str = "") -> str:
        """Format the script instruction, falling back when no description is given"""
        return cls.AD_SCRIPT_TEMPLATE.format(
            product_description=product_description or NO_DESCRIPTION_FALLBACK
        )

# Response schema the script model is constrained to
AD_SCRIPT_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "title": {
            "type": "STRING",
            "description": "A catchy, short title for the commercial. (e.g., 'Unleash the Sound')."
        },
        "tagline": {
            "type": "STRING",
            "description": "A memorable tagline for the product. (e.g., 'Your World, Your Music.')."
        },
        "scenes": {
            "type": "ARRAY",
            "description": "An array of scenes that make up the 30-second commercial.",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "sceneNumber": {
                        "type": "INTEGER",
                        "description": "The sequential number of the scene."
                    },
                    "setting": {
                        "type": "STRING",
                        "description": "The visual setting of the scene. (e.g., 'A vibrant, sunlit city park.')."
                    },
                    "action": {
                        "type": "STRING",
                        "description": "A description of the main action and visuals in the scene."
                    },
                    "dialogue": {
                        "type": "STRING",
                        "description": "Any dialogue or voiceover in the scene. Use 'VO:' for voiceover. Use 'None' if no dialogue."
                    },
                    "sound": {
                        "type": "STRING",
                        "description": "Description of sound effects or music in the scene."
                    }
                },
                "required": ["sceneNumber", "setting", "action", "dialogue", "sound"]
            }
        }
    },
    "required": ["title", "tagline", "scenes"]
}
