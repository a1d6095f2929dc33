RECIPE_DETAILS_PROMPT_VERSION = "v1"

RECIPE_DETAILS_TEMPLATE = """Please provide a detailed cooking recipe for "{recipe_name}" with these ingredients: {ingredients}.
Include step-by-step instructions, cooking time, serving size, and any cooking tips.
Format the response in a clear, readable way with sections for ingredients, instructions, cooking time, and tips. Critical: respond in {language}."""
