import json
from typing import Sequence

RECIPE_PROMPT = """Parse the following {content_type} content into a recipe and return it as JSON with this exact structure:

{{
    "title": "Recipe Title",
    "description": "Recipe description",
    "servings": 4,
    "prepTime": 30,
    "cookTime": 45,
    "ingredients": [
        {{
            "description": "2 cups flour"
        }},
        {{
            "description": "1 tsp salt"
        }}
    ],
    "instructions": [
        {{
            "stepNumber": 1,
            "description": "First step description"
        }},
        {{
            "stepNumber": 2,
            "description": "Second step description"
        }}
    ],
    "nutrition": {{
        "calories": 350,
        "protein": 12,
        "carbs": 45,
        "fat": 15,
        "fiber": 3,
        "sugar": 8
    }}
}}

Content to parse:
{content}

Important:
- Return valid JSON only
- Follow the exact structure shown above
- Use numbers for numeric values (not strings)
- Include all available information
- If nutrition information is not available, omit the nutrition object
- Ensure proper JSON formatting"""

INSTRUCTIONS_PROMPT = """Parse the following recipe content into a numbered list of instructions. Return only a JSON array with this exact structure, no additional text:
[
    {{
        "step_number": 1,
        "instruction": "First step instruction"
    }}
]

Content to parse:
{content}"""

CATEGORIZE_PROMPT = """Categorize each as PRODUCE, MEAT, DAIRY, BAKERY, PANTRY, FROZEN, BEVERAGES, HOUSEHOLD, OTHER.
Format: {{"item":"category"}}
Items:{items}"""


def build_recipe_prompt(content: str, content_type: str) -> str:
    return RECIPE_PROMPT.format(content_type=content_type, content=content)


def build_instructions_prompt(content: str) -> str:
    return INSTRUCTIONS_PROMPT.format(content=content)


def build_categorize_prompt(items: Sequence[str]) -> str:
    return CATEGORIZE_PROMPT.format(items=json.dumps(list(items), ensure_ascii=False))
