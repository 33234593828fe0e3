"""
Recover a TaskSet from free-text model output.

The model is asked for a JSON array, but nothing guarantees it answers with one.
Extraction is therefore best effort and returns a tagged result instead of raising:

- Extracted: the response held JSON; recognized buckets were taken from it.
  Unrecognized shapes (numbers, null, empty arrays, objects without bucket keys)
  still count as Extracted, with empty buckets.
- ExtractionFailed: no parseable JSON, or a bucket held something other than a list of strings.
"""
import json
import logging
import re

from pydantic import BaseModel, ValidationError

from .models import TaskSet

logger = logging.getLogger(__name__)

PARSE_ERROR_MESSAGE = "Failed to parse response. Please try again."
SHAPE_ERROR_MESSAGE = "Response had an unexpected shape. Please try again."

# JSON keys as the model is asked to emit them, in bucket order
BUCKET_KEYS = ("highPriority", "mediumPriority", "lowPriority")

FENCED_JSON = re.compile(r"```json([\s\S]*?)```", re.IGNORECASE)


class Extracted(BaseModel):
    task_set: TaskSet


class ExtractionFailed(BaseModel):
    reason: str
    text: str  # offending candidate text


Extraction = Extracted | ExtractionFailed


def find_json_candidate(response: str) -> str:
    """Interior of the first ```json fenced block, or the whole response, stripped."""
    match = FENCED_JSON.search(response)
    if match:
        return match.group(1).strip()
    return response.strip()


def collect_buckets(parsed) -> dict:
    """Map bucket keys to raw values; later occurrences overwrite earlier ones."""
    if isinstance(parsed, list):
        sources = [item for item in parsed if isinstance(item, dict)]
    elif isinstance(parsed, dict):
        sources = [parsed]
    else:
        sources = []

    buckets = {}
    for source in sources:
        for key in BUCKET_KEYS:
            if source.get(key) is not None:
                buckets[key] = source[key]
    return buckets


def extract_task_set(response) -> Extraction:
    if not isinstance(response, str):
        return Extracted(task_set=TaskSet())

    candidate = find_json_candidate(response)
    logger.debug("Extracted JSON: %s", candidate)

    try:
        parsed = json.loads(candidate)
    except json.JSONDecodeError as e:
        logger.error("Failed to parse model JSON: %s\n%s", e, candidate)
        return ExtractionFailed(reason=PARSE_ERROR_MESSAGE, text=candidate)

    try:
        task_set = TaskSet.model_validate(collect_buckets(parsed))
    except ValidationError as e:
        logger.warning("Model JSON has invalid buckets: %s\n%s", e, candidate)
        return ExtractionFailed(reason=SHAPE_ERROR_MESSAGE, text=candidate)

    return Extracted(task_set=task_set)
