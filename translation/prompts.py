"""
Prompts for translation service.
"""

TARGET_LANGUAGE = "Chinook Jargon"


def get_translation_prompt(word: str, target_language: str = TARGET_LANGUAGE) -> str:
    """Generate the single-message translation prompt."""
    return (
        f'Translate "{word}" to {target_language}. '
        "If no direct translation exists, provide a related word or explanation."
    )
