# Categorization prompt sent to the model
# Output shape is advisory: extraction must not assume the model honors it
CATEGORIZE_PROMPT = """You are an excellent task manager. Categorize these tasks into high/medium/low priority and return ONLY a JSON array in this exact format:
[
  {{"highPriority": []}},
  {{"mediumPriority": []}},
  {{"lowPriority": []}}
]

Tasks to categorize:
{tasks}"""


def build_categorize_prompt(tasks: str) -> str:
    """Append the raw task text, verbatim, to the categorization instruction."""
    return CATEGORIZE_PROMPT.format(tasks=tasks)
