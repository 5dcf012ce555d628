"""
SpaCy Loader — Centralized NLP resource management.

Provides a single shared spaCy model instance for sentence segmentation.
spaCy is only needed for the "spacy" segmenter; install the ``nlp`` extra.
"""

from typing import Optional

# Lazy-loaded spaCy model
_nlp: Optional["spacy.language.Language"] = None
_loaded_name: Optional[str] = None

# Default model name
DEFAULT_MODEL = "en_core_web_sm"


def get_nlp(model_name: str = DEFAULT_MODEL) -> "spacy.language.Language":
    """
    Get or load the shared spaCy model.

    Args:
        model_name: The spaCy model to load (default: en_core_web_sm)

    Returns:
        The loaded spaCy Language model

    Raises:
        RuntimeError: If spaCy or the model cannot be loaded
    """
    global _nlp, _loaded_name

    if _nlp is None or _loaded_name != model_name:
        try:
            import spacy
        except ImportError:
            raise RuntimeError(
                "spaCy is not installed. Install with: pip install 'annoguard[nlp]'"
            )
        try:
            _nlp = spacy.load(model_name)
        except OSError:
            raise RuntimeError(
                f"spaCy model '{model_name}' not found. "
                f"Install with: python -m spacy download {model_name}"
            )
        _loaded_name = model_name

    return _nlp

