"""
Task board: the in-memory TaskSet of one session and the operations that replace it.
"""
import logging
from typing import Awaitable, Callable, Optional

from .extraction import ExtractionFailed, extract_task_set
from .gateway import GatewayError
from .models import BUCKETS, BoardState, TaskSet
from .prompts import build_categorize_prompt

logger = logging.getLogger(__name__)

PRIORITIZE_ERROR_MESSAGE = "Failed to prioritize tasks. Please try again."


class BoardBusyError(Exception):
    """A categorization request is already in flight."""


def move_item(items: list[str], old_index: int, new_index: int) -> list[str]:
    """Return a copy with the item at old_index moved to new_index."""
    moved = list(items)
    moved.insert(new_index, moved.pop(old_index))
    return moved


def reorder(task_set: TaskSet, active_id: str, over_id: Optional[str]) -> TaskSet:
    """
    Move active_id to the position of over_id within the bucket holding both.

    Buckets are scanned high -> medium -> low and only the first one containing
    both labels is touched, so a label duplicated across buckets resolves to
    the earliest bucket.
    """
    if over_id is None or active_id == over_id:
        return task_set

    for bucket in BUCKETS:
        tasks = getattr(task_set, bucket)
        if active_id in tasks and over_id in tasks:
            reordered = move_item(tasks, tasks.index(active_id), tasks.index(over_id))
            return task_set.model_copy(update={bucket: reordered})

    return task_set


class TaskBoard:
    def __init__(self):
        self.tasks = TaskSet()
        self.error = ""
        self.is_loading = False

    def state(self) -> BoardState:
        return BoardState(tasks=self.tasks, error=self.error, is_loading=self.is_loading)

    async def prioritize(self, raw_tasks: str, generate: Callable[[str], Awaitable[str]]) -> BoardState:
        """Categorize raw_tasks through generate and replace the TaskSet with the result."""
        if self.is_loading:
            raise BoardBusyError("Tasks are already being prioritized")

        self.is_loading = True
        self.error = ""
        try:
            text = await generate(build_categorize_prompt(raw_tasks))
        except GatewayError as e:
            # Lists stay as they were; the user can retry
            logger.error("Prioritization failed: %s", e)
            self.error = PRIORITIZE_ERROR_MESSAGE
            return self.state()
        finally:
            self.is_loading = False

        result = extract_task_set(text)
        if isinstance(result, ExtractionFailed):
            self.tasks = TaskSet()
            self.error = result.reason
        else:
            self.tasks = result.task_set
        logger.info("Parsed response: %s", self.tasks.model_dump(by_alias=True))
        return self.state()

    def reorder(self, active_id: str, over_id: Optional[str]) -> BoardState:
        self.tasks = reorder(self.tasks, active_id, over_id)
        return self.state()
