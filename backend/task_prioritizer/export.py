import csv
import io
import json

from .models import TaskSet

PRIORITY_LABELS = {
    "high_priority": "High",
    "medium_priority": "Medium",
    "low_priority": "Low",
}


def to_json(task_set: TaskSet) -> str:
    """Pretty-printed JSON using the camelCase bucket keys."""
    return json.dumps(task_set.model_dump(by_alias=True), indent=2, ensure_ascii=False)


def to_csv(task_set: TaskSet) -> str:
    """Priority,Task rows in High -> Medium -> Low order, every field quoted, no trailing newline."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(["Priority", "Task"])
    for bucket, label in PRIORITY_LABELS.items():
        for task in getattr(task_set, bucket):
            writer.writerow([label, task])
    return buffer.getvalue().removesuffix("\n")
