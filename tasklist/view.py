import logging
from collections.abc import Callable

import httpx

from .config import get_settings
from .models import TaskOut

logger = logging.getLogger(__name__)

LOAD_ERROR_MESSAGE = "Could not connect to the API to load tasks."


def _log_error(message: str) -> None:
    logger.error(message)


def _detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.reason_phrase
    if isinstance(body, dict):
        return str(body.get("detail") or body.get("message") or response.reason_phrase)
    return response.reason_phrase


class TaskView:
    def __init__(
        self,
        client: httpx.Client,
        api_url: str | None = None,
        on_error: Callable[[str], None] = _log_error,
    ) -> None:
        self._client = client
        self._api_url = (api_url or get_settings().api_url).rstrip("/")
        self._on_error = on_error
        self.tasks: list[TaskOut] = []
        self.load_error: str | None = None

    def get(self, task_id: int) -> TaskOut | None:
        return next((task for task in self.tasks if task.id == task_id), None)

    def _report(self, action: str, reason: str) -> None:
        self._on_error(f"Failed to {action}: {reason}")

    def _call(self, action: str, method: str, url: str, **kwargs) -> httpx.Response | None:
        try:
            return self._client.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            self._report(action, str(exc) or exc.__class__.__name__)
            return None

    def _drop_stale(self, task_id: int) -> None:
        self.tasks = [task for task in self.tasks if task.id != task_id]

    def load(self) -> bool:
        self.tasks = []
        self.load_error = None
        tasks = None
        response = self._call("load tasks", "GET", self._api_url)
        if response is not None and not response.is_success:
            self._report("load tasks", f"HTTP error! status: {response.status_code}")
        elif response is not None:
            try:
                tasks = [TaskOut.model_validate(item) for item in response.json()]
            except (ValueError, TypeError) as exc:
                self._report("load tasks", str(exc))
        if tasks is None:
            self.load_error = LOAD_ERROR_MESSAGE
            return False
        self.tasks = tasks
        return True

    def add(self, name: str) -> TaskOut | None:
        name = name.strip()
        if not name:
            return None
        response = self._call("add task", "POST", self._api_url, json={"name": name})
        if response is None:
            return None
        if response.status_code != 201:
            self._report("add task", _detail(response))
            return None
        try:
            task = TaskOut.model_validate(response.json())
        except ValueError as exc:
            self._report("add task", str(exc))
            return None
        self.tasks.insert(0, task)
        return task

    def _patch(self, task: TaskOut, action: str, fields: dict) -> bool:
        response = self._call(action, "PATCH", f"{self._api_url}/{task.id}", json=fields)
        if response is None:
            return False
        if response.status_code == 404:
            self._drop_stale(task.id)
        if not response.is_success:
            self._report(action, _detail(response))
            return False
        return True

    def toggle(self, task_id: int) -> bool:
        task = self.get(task_id)
        if task is None:
            return False
        completed = not task.completed
        if not self._patch(task, "update task status", {"completed": completed}):
            return False
        task.completed = completed
        return True

    def edit(self, task_id: int, name: str) -> bool:
        task = self.get(task_id)
        name = name.strip()
        if task is None or not name:
            return False
        if not self._patch(task, "edit task", {"name": name}):
            return False
        task.name = name
        return True

    def delete(self, task_id: int) -> bool:
        task = self.get(task_id)
        if task is None:
            return False
        response = self._call("delete task", "DELETE", f"{self._api_url}/{task.id}")
        if response is None:
            return False
        if response.status_code == 404:
            self._drop_stale(task.id)
        if not response.is_success:
            self._report("delete task", _detail(response))
            return False
        self._drop_stale(task.id)
        return True

    def render(self) -> list[str]:
        lines = [f"[{'x' if task.completed else ' '}] {task.name}" for task in self.tasks]
        if self.load_error is not None:
            lines.append(self.load_error)
        return lines
