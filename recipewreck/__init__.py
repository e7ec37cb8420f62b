"""RecipeWreck: joke recipe generator and AI role onboarding API."""
