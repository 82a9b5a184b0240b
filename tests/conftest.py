import pytest
from types import SimpleNamespace

from core.models import PersonalInfo
from services.gemini import GeminiClient


class FakeModels:
    """Stands in for `genai.Client(...).aio.models`."""

    def __init__(self, reply: str | None = None, exc: Exception | None = None):
        self.reply = reply
        self.exc = exc
        self.calls = []

    async def generate_content(self, model, contents, config=None):
        self.calls.append({"model": model, "contents": contents, "config": config})
        if self.exc is not None:
            raise self.exc
        return SimpleNamespace(text=self.reply)


def fake_gemini(reply: str | None = None, exc: Exception | None = None, api_key: str | None = "test-key"):
    """GeminiClient wired to a FakeModels; returns (client, models)."""
    models = FakeModels(reply, exc)

    def factory(api_key):
        return SimpleNamespace(api_key=api_key, aio=SimpleNamespace(models=models))

    return GeminiClient(api_key=api_key, model="gemini-test", client_factory=factory), models


FIVE_LUNCHES = """Sure! Here are your meals:
```json
[
  {"id": "lunch_1", "name": "Chicken Wrap", "calories": 420, "protein": 30, "carbs": 40, "fat": 14, "category": "lunch"},
  {"id": "lunch_2", "name": "Lentil Soup", "calories": "310", "protein": "18g", "carbs": 45, "fat": 6, "category": "lunch"},
  {"name": "Poke Bowl", "calories": 520.7, "protein": 28, "carbs": 60, "fat": 16},
  {"id": "lunch_4", "name": "Caprese Sandwich", "calories": 450, "protein": 19, "carbs": 48, "fat": "n/a", "category": "lunch"},
  {"id": "lunch_5", "name": "Falafel Salad", "calories": 390, "protein": 14, "carbs": 42, "fat": 18, "category": "lunch"}
]
```
Enjoy!"""


@pytest.fixture
def profile() -> PersonalInfo:
    return PersonalInfo(
        name="Sam",
        age=30,
        gender="male",
        weight=80,
        height=180,
        activity_level="moderately_active",
        goal="lose_weight",
        dietary_restrictions=["Vegetarian"],
        allergies=["peanuts"],
        target_calories=2259,
    )
