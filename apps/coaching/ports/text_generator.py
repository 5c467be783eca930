# apps/coaching/ports/text_generator.py
from abc import ABC, abstractmethod
from typing import Any, Dict


class ITextGenerator(ABC):
    """Model językowy zwracający odpowiedź w formacie JSON."""

    @abstractmethod
    def generate_json(self, system_prompt: str, user_prompt: str) -> Dict[str, Any]:
        """
        Zwraca sparsowany obiekt JSON.
        Rzuca UpstreamGenerationError przy błędzie dostawcy lub nieczytelnej odpowiedzi.
        """
        pass
