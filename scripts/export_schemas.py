"""Export JSON schemas for PreferenceModel, ItineraryResult and the model response schema."""

import json
from pathlib import Path

from backend.app.models import ITINERARY_RESPONSE_SCHEMA, ItineraryResult, PreferenceModel


def main(schemas_dir: Path = Path("docs/schemas")) -> None:
    """Export schemas to docs/schemas/."""
    schemas_dir.mkdir(parents=True, exist_ok=True)

    exports = {
        "PreferenceModel": PreferenceModel.model_json_schema(),
        "ItineraryResult": ItineraryResult.model_json_schema(by_alias=True),
        "ItineraryResponse": ITINERARY_RESPONSE_SCHEMA,
    }

    for name, schema in exports.items():
        path = schemas_dir / f"{name}.schema.json"
        with open(path, "w") as f:
            json.dump(schema, f, indent=2)
        print(f"Exported {name} schema to {path}")


if __name__ == "__main__":
    main()
