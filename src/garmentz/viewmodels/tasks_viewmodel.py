# Rev 0.3.1: checkbox toggle walks the task status cycle
from __future__ import annotations

import logging

from garmentz.models.entities import Task
from garmentz.services.status_rules import TASK_RULES
from garmentz.viewmodels.entity_viewmodel import EntityViewModel, MutationResult

log = logging.getLogger(__name__)


class TasksViewModel(EntityViewModel):
    collection = "tasks"
    entity_cls = Task
    noun = "task"
    required_field = "title"
    rules = TASK_RULES
    status_messages = {
        "todo": "Task is back on the to-do list",
        "in_progress": "Task is now in progress",
        "completed": "Task has been completed",
    }

    @property
    def tasks(self) -> list[Task]:
        return self.cache

    def toggle_status(self, task_id: str) -> MutationResult:
        task = self.find(task_id)
        if task is None:
            log.warning("toggle_status: task %s is not cached", task_id)
            self._alert_error("That task no longer exists.")
            return MutationResult(False, "not_found")
        return self.update(task_id, {"status": TASK_RULES.next_in_cycle(task.status)})

    def _label(self, entity: Task) -> str:
        return f'"{entity.title}"'
