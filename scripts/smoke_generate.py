import json
import os

from dotenv import find_dotenv, load_dotenv

from recipewreck.services.genai_client import GenAIClient
from recipewreck.services.recipe_generator import generate_recipe


def run_smoke(subject: str = "breakfast lasagna") -> None:
    env_path = find_dotenv()

    if not env_path:
        raise FileNotFoundError(".env not found. Create one at the project root.")

    print(f".env found at: {env_path}")
    load_dotenv(dotenv_path=env_path)
    api_key = os.getenv("GOOGLE_GENAI_API_KEY")

    if not api_key:
        raise ValueError(f"GOOGLE_GENAI_API_KEY is not set. Check {env_path}.")

    client = GenAIClient(
        api_key=api_key,
        text_model=os.getenv("GENAI_TEXT_MODEL", "gemini-1.5-flash-latest"),
        image_model=os.getenv("GENAI_IMAGE_MODEL", "imagen-3.0-generate-002"),
    )

    print(f"Asking for a recipe about: {subject}")
    try:
        result = generate_recipe(client, subject)
    except Exception as e:
        print(f"\nGeneration failed: {e}")
        return

    print("\n--- Parsed recipe ---")
    print(json.dumps(
        {
            "title": result.title,
            "ingredients": result.ingredients,
            "steps": result.steps,
            "imageBase64": "[IMAGE_DATA_PRESENT]" if result.image_base64 else "[NO_IMAGE_DATA]",
        },
        indent=2,
        ensure_ascii=False,
    ))


if __name__ == "__main__":
    run_smoke()
