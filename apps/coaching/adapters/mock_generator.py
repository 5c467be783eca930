# apps/coaching/adapters/mock_generator.py
from typing import Any, Dict, Optional

from apps.coaching.ports.text_generator import ITextGenerator

# Kanoniczna odpowiedź offline (brak klucza API, testy, dev)
DEFAULT_RESPONSE = {
    'tasks': [
        {
            'title': f"Step {i}",
            'subtasks': [
                {'title': f"Step {i}.{j}", 'estimatedMinutes': 30}
                for j in range(1, 4)
            ],
        }
        for i in range(1, 11)
    ],
    'motivation': "Every finished task brings you closer. Keep going!",
    'advice': "Pick the smallest open task and finish it today.",
    'tip': "Work in focused 25-minute blocks with short breaks.",
    'quote': "Small steps taken every day turn a distant goal into a finished one.",
    'vision': "I see myself having reached this goal, proud of the steady work that got me there.",
    'message': "Hey, it's you from a year ahead. The small tasks you keep ticking off add up.\n\nKeep showing up. It works.",
}


class MockTextGenerator(ITextGenerator):
    def __init__(self, response: Optional[Dict[str, Any]] = None):
        self.response = DEFAULT_RESPONSE if response is None else response
        self.calls = []

    def generate_json(self, system_prompt: str, user_prompt: str) -> Dict[str, Any]:
        self.calls.append((system_prompt, user_prompt))
        return dict(self.response)
