# apps/coaching/adapters/factory.py
import logging
from django.conf import settings
from apps.coaching.ports.text_generator import ITextGenerator

logger = logging.getLogger(__name__)


def get_text_generator() -> ITextGenerator:
    """Wybór adaptera wg settings.TEXT_GENERATOR ('openai' / 'mock')."""
    kind = (settings.TEXT_GENERATOR or 'mock').lower()

    if kind == 'openai':
        from apps.coaching.adapters.openai_generator import OpenAITextGenerator
        return OpenAITextGenerator()

    if kind != 'mock':
        logger.warning("Unknown TEXT_GENERATOR '%s', falling back to mock", kind)

    from apps.coaching.adapters.mock_generator import MockTextGenerator
    return MockTextGenerator()
