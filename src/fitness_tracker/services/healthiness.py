"""Meal healthiness classification via the oracle."""

import json
from dataclasses import dataclass

from fitness_tracker.services.oracle import OracleService

HEALTHY = "Healthy"
UNHEALTHY = "Unhealthy"

_PROMPT = (
    "You are a nutrition expert. For the following JSON array of meal names, "
    'classify each as "Healthy" or "Unhealthy". Return your response as a single '
    "JSON object where keys are the meal names and values are the classification. "
    'For example: {{"Grilled Chicken Salad": "Healthy", '
    '"Fried Parotta": "Unhealthy"}}\n\n{names}'
)


@dataclass
class MealHealthClassifier:
    """Classifies meal names as Healthy or Unhealthy in one batch call."""

    oracle: OracleService

    async def classify(self, names: list[str]) -> dict[str, str]:
        """Return a label per name; unknown or unlabelled names are omitted.

        Raises OracleUnavailable when the oracle fails.
        """
        if not names:
            return {}
        payload = await self.oracle.complete_json(
            _PROMPT.format(names=json.dumps(names))
        )
        return {
            name: label
            for name, label in payload.items()
            if name in names and label in {HEALTHY, UNHEALTHY}
        }
